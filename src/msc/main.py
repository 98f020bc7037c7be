#!/usr/bin/env python3
"""msc: edit the Minecraft server launch options, then start the server"""

import argparse
import logging
import sys

from rich.console import Console

from .adapters.config_env import load_app_config
from .adapters.launcher import SubprocessServerLauncher
from .adapters.prompts import QuestionaryPrompter
from .adapters.storage import JsonConfigurationStore
from .core.controller import EditorController
from .core.state_machine import Machine
from .platform_utils import get_platform_info


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="msc", description="Interactively configure and launch a Minecraft server."
    )
    parser.add_argument(
        "config_dir",
        nargs="?",
        help="Minecraft server folder (defaults to MSC_CONFIG_DIR or ~/.minecraft/server)",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    app_config = load_app_config(args.config_dir, debug=args.debug)

    logging.basicConfig(
        level=logging.DEBUG if app_config.debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger(__name__).debug("Platform: %s", get_platform_info())

    console = Console()
    console.rule("[bold cyan]Minecraft server configurator[/bold cyan]")
    console.print(f"Configuration: {app_config.configuration_path}", markup=False)

    store = JsonConfigurationStore(app_config.configuration_path)
    controller = EditorController(
        machine=Machine(store.load()),
        prompter=QuestionaryPrompter(console),
        store=store,
        launcher=SubprocessServerLauncher(app_config),
    )
    return controller.run()


if __name__ == "__main__":
    sys.exit(main())
