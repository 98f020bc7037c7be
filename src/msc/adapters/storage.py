"""JSON file storage for the server configuration."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from ..core.configuration import ServerConfiguration

logger = logging.getLogger(__name__)


class JsonConfigurationStore:
    """Persist a ServerConfiguration as msc-configuration.json."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def load(self) -> ServerConfiguration:
        """Load the configuration, falling back to defaults on any problem."""
        if not self.path.exists():
            logger.info("No configuration at %s, using defaults", self.path)
            return ServerConfiguration.defaults()

        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
            logger.warning("Unable to read %s (%s), falling back to defaults", self.path, e)
            return ServerConfiguration.defaults()

        try:
            return ServerConfiguration.from_dict(data)
        except ValueError as e:
            logger.warning("Unable to parse %s (%s), falling back to defaults", self.path, e)
            return ServerConfiguration.defaults()

    def save(self, configuration: ServerConfiguration) -> None:
        """Write the file atomically; a failed write keeps the previous file."""
        temp_path = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                temp_path = Path(f.name)
                json.dump(configuration.to_dict(), f, indent=2, ensure_ascii=False)
                f.write("\n")
            os.replace(temp_path, self.path)
        except OSError as e:
            logger.error("Unable to save configuration to %s: %s", self.path, e)
            if temp_path is not None:
                temp_path.unlink(missing_ok=True)
            return
        logger.debug("Saved configuration to %s", self.path)
