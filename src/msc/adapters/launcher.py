"""Server launch adapter (java subprocess)."""

from __future__ import annotations

import logging
import shutil
import subprocess
from typing import Sequence

from ..core.config_model import AppConfig
from ..core.configuration import Boolean, Property, ServerConfiguration
from ..core.options import CATALOGUE, OptionDescriptor

logger = logging.getLogger(__name__)

EXIT_JAVA_MISSING = 127
EXIT_LAUNCH_FAILED = 1


def build_server_flags(
    configuration: ServerConfiguration,
    catalogue: Sequence[OptionDescriptor] = CATALOGUE,
) -> list[str]:
    """Translate the configuration into Minecraft server arguments."""
    flags: list[str] = []
    for option in catalogue:
        value = configuration.get(option.property)
        if isinstance(value, Boolean):
            if option.property is Property.GUI:
                # The server opens its GUI unless told otherwise.
                if not value.value:
                    flags.append("--nogui")
            elif value.value:
                flags.append(f"--{option.property.value}")
        elif value.value is not None:
            flags.extend([f"--{option.property.value}", str(value.value)])
    return flags


class SubprocessServerLauncher:
    def __init__(self, app_config: AppConfig):
        self._app_config = app_config

    def command(self, configuration: ServerConfiguration) -> list[str]:
        return [
            self._app_config.java,
            *self._app_config.java_args,
            "-jar",
            str(self._app_config.server_jar_path),
            *build_server_flags(configuration),
        ]

    def launch(self, configuration: ServerConfiguration) -> int:
        if not _has_cmd(self._app_config.java):
            logger.error("Java executable %r was not found", self._app_config.java)
            return EXIT_JAVA_MISSING
        if not self._app_config.server_jar_path.is_file():
            logger.error("Server jar %s does not exist", self._app_config.server_jar_path)
            return EXIT_LAUNCH_FAILED

        command = self.command(configuration)
        logger.info("Launching: %s", " ".join(command))
        try:
            result = subprocess.run(command, cwd=self._app_config.configuration_dir)
        except OSError as e:
            logger.error("Unable to launch the server: %s", e)
            return EXIT_LAUNCH_FAILED
        return result.returncode


def _has_cmd(name: str) -> bool:
    return shutil.which(name) is not None
