"""Selection of the action capability at startup."""

import sys

from ..core.actions import ActionCapability, UnsupportedActions
from ..core.config import Settings
from ..core.logger import get_logger
from .applescript import AppleScriptActions

logger = get_logger(__name__)


def build_capability(settings: Settings, platform: str = sys.platform) -> ActionCapability:
    """Create the capability configured by ``settings``.

    ``auto`` uses AppleScript on macOS and the unsupported variant on every other
    platform, where each action reports failure instead of crashing the server.
    """
    backend = settings.actions
    if backend == "auto":
        backend = "applescript" if platform == "darwin" else "unsupported"

    if backend == "applescript":
        capability: ActionCapability = AppleScriptActions(osascript=settings.osascript)
    else:
        capability = UnsupportedActions()

    logger.info("Using '%s' action capability", capability.name)
    if not capability.available:
        logger.warning("Affinity automation is unavailable here; every action will report failure.")
    return capability
