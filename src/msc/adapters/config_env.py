"""Env configuration adapter producing a structured AppConfig."""

from __future__ import annotations

from pathlib import Path

from ..config import config as env_config
from ..core.config_model import AppConfig


def load_app_config(configuration_dir: str | Path | None = None, debug: bool = False) -> AppConfig:
    """Build the app settings; explicit arguments win over the environment."""
    if configuration_dir:
        directory = Path(configuration_dir).expanduser()
    else:
        directory = env_config.CONFIG_DIR
    return AppConfig(
        configuration_dir=directory,
        configuration_filename=env_config.CONFIGURATION_FILENAME,
        java=env_config.JAVA,
        server_jar=env_config.SERVER_JAR,
        java_args=tuple(env_config.JAVA_ARGS),
        debug=debug or env_config.DEBUG,
    )
