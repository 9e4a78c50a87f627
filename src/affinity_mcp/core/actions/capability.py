"""The external action capability that tools ultimately invoke."""

from abc import ABC, abstractmethod

from pydantic import BaseModel

from ..exceptions import ActionUnsupportedError


class ActionCapability(ABC):
    """
    Performs named external actions.

    Implementations return the typed result of the action, or raise
    ``ActionError`` with a human-readable reason when the action fails.
    """

    name: str = "capability"

    @property
    def available(self) -> bool:
        """Whether actions can actually run in this process."""
        return True

    @abstractmethod
    async def perform(self, kind: str, request: BaseModel) -> BaseModel:
        """Run one action.

        Args:
            kind: Action identifier, e.g. ``"open_file"``.
            request: The validated, resolved request for that action.

        Returns:
            The action's typed result.

        Raises:
            ActionError: If the external action reports a failure.
        """
        pass


class UnsupportedActions(ActionCapability):
    """Capability used where the automation backend does not exist. Every action fails."""

    name = "unsupported"

    def __init__(self, reason: str = "Actions are not supported on this platform.") -> None:
        self.reason = reason

    @property
    def available(self) -> bool:
        return False

    async def perform(self, kind: str, request: BaseModel) -> BaseModel:
        raise ActionUnsupportedError(f"{kind}: {self.reason}")
