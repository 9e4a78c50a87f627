"""Process entry point: read settings, wire the components, serve on stdio."""

import asyncio
from typing import Optional

from . import __version__
from .affinity import AffinityTools, build_capability
from .core import (
    ActionCapability,
    ActionExecutor,
    BatchScheduler,
    EventSink,
    Settings,
    ToolExecutor,
    ToolRegistry,
    get_logger,
    setup_logging,
)
from .design import DesignServiceClient, DesignTools
from .server import LineTransport, RequestDispatcher

logger = get_logger(__name__)


def build_registry(
    settings: Settings,
    capability: Optional[ActionCapability] = None,
    events: Optional[EventSink] = None,
) -> ToolRegistry:
    """Build the frozen tool catalog.

    Args:
        settings: Runtime settings.
        capability: Action capability to use. Selected from ``settings`` when omitted.
        events: Optional sink shared by the executors.

    Returns:
        The registry with every tool registered, frozen.
    """
    capability = capability or build_capability(settings)
    action_executor = ActionExecutor(capability, events=events)
    scheduler = BatchScheduler(action_executor, events=events)

    registry = ToolRegistry()
    AffinityTools(action_executor, scheduler).register(registry)
    DesignTools(DesignServiceClient(api_key=settings.api_key)).register(registry)
    return registry.freeze()


def build_dispatcher(
    settings: Settings,
    capability: Optional[ActionCapability] = None,
    events: Optional[EventSink] = None,
) -> RequestDispatcher:
    """Wire the registry, executors and dispatcher for one server process."""
    registry = build_registry(settings, capability=capability, events=events)
    return RequestDispatcher(
        registry,
        ToolExecutor(registry, events=events),
        version=__version__,
        server_name=settings.server_name,
        events=events,
    )


def main() -> None:
    settings = Settings.from_env()
    setup_logging(level=settings.log_level)
    logger.info("Starting %s %s", settings.server_name, __version__)

    dispatcher = build_dispatcher(settings)
    try:
        asyncio.run(LineTransport(dispatcher).serve())
    except KeyboardInterrupt:
        logger.info("Interrupted; shutting down.")


if __name__ == "__main__":
    main()
