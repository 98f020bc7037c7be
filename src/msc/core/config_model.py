"""Core configuration model (structured view)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class AppConfig:
    configuration_dir: Path
    configuration_filename: str
    java: str
    server_jar: str
    java_args: tuple[str, ...]
    debug: bool

    @property
    def configuration_path(self) -> Path:
        return self.configuration_dir / self.configuration_filename

    @property
    def server_jar_path(self) -> Path:
        return self.configuration_dir / self.server_jar
