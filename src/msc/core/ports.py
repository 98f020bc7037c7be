"""Core ports (interfaces) for msc.

These protocols define the boundaries between the editor loop and the
terminal, the disk and the server process. They are intentionally small and
capability-oriented to keep the core free of I/O.
"""

from __future__ import annotations

from typing import Protocol, Sequence, TYPE_CHECKING, runtime_checkable

if TYPE_CHECKING:
    from .configuration import ServerConfiguration


@runtime_checkable
class Prompter(Protocol):
    """Asks the user for choices and values.

    Every prompt returns None when the user aborts it.
    """

    def select(self, message: str, choices: Sequence[str], default: int = 0) -> int | None:
        """Present ``choices`` and return the index of the chosen one."""

    def confirm(self, message: str, default: bool) -> bool | None:
        """Ask a yes/no question."""

    def integer(
        self, message: str, minimum: int, maximum: int, default: int | None = None
    ) -> int | None:
        """Ask for a whole number within [minimum, maximum]."""

    def text(self, message: str, default: str | None = None) -> str | None:
        """Ask for free text."""

    def show(self, message: str) -> None:
        """Display an informational line."""


@runtime_checkable
class ConfigurationStore(Protocol):
    """Loads and persists the server configuration."""

    def load(self) -> ServerConfiguration:
        """Return the stored configuration, or defaults when there is none."""

    def save(self, configuration: ServerConfiguration) -> None:
        """Persist ``configuration``."""


@runtime_checkable
class ServerLauncher(Protocol):
    """Starts the Minecraft server."""

    def launch(self, configuration: ServerConfiguration) -> int:
        """Run the server until it exits and return its exit code."""
