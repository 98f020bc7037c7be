"""Configuration for msc"""
import os
import shlex
from pathlib import Path

from dotenv import load_dotenv

from .platform_utils import default_configuration_dir

load_dotenv()


class Config:
    """Environment-backed settings for the editor and the server launch"""

    CONFIGURATION_FILENAME = "msc-configuration.json"

    # Where msc-configuration.json and the server jar live
    CONFIG_DIR = Path(os.getenv("MSC_CONFIG_DIR", "") or default_configuration_dir()).expanduser()

    # Server launch
    JAVA = os.getenv("MSC_JAVA", "java")
    SERVER_JAR = os.getenv("MSC_SERVER_JAR", "server.jar")
    JAVA_ARGS = shlex.split(os.getenv("MSC_JAVA_ARGS", ""))

    DEBUG = os.getenv("DEBUG", "false").lower() == "true"


config = Config()
