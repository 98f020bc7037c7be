"""Platform detection and cross-platform utilities for msc"""

import os
import platform
import sys
from pathlib import Path

# Platform detection
IS_WINDOWS = sys.platform == "win32"
IS_LINUX = sys.platform.startswith("linux")
IS_MACOS = sys.platform == "darwin"


def default_configuration_dir() -> Path:
    """Directory of the Minecraft server when none is given."""
    if IS_WINDOWS:
        appdata = os.environ.get("APPDATA")
        if appdata:
            return Path(appdata) / ".minecraft" / "server"
    return Path.home() / ".minecraft" / "server"


def get_platform_info() -> dict:
    """Get platform information for debug logging."""
    return {
        "system": platform.system(),
        "release": platform.release(),
        "machine": platform.machine(),
        "python_version": platform.python_version(),
        "is_windows": IS_WINDOWS,
        "is_linux": IS_LINUX,
        "is_macos": IS_MACOS,
    }
