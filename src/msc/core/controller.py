"""Core orchestration for msc.

Drives the editor state machine from user answers: each iteration looks at the
machine's state, asks the matching question through the prompter port, turns
the answer into an event and dispatches it. Saving and launching happen here,
around the machine, never inside it.
"""

from __future__ import annotations

import logging
from typing import Sequence

from .configuration import (
    PORT_MAX,
    PORT_MIN,
    Boolean,
    OptionalInteger,
    OptionalText,
    TypedValue,
)
from .options import CATALOGUE, OptionDescriptor
from .ports import ConfigurationStore, Prompter, ServerLauncher
from .state_machine import (
    AppEvent,
    AppState,
    EditorEvent,
    EditorState,
    Event,
    Machine,
    Payload,
    editor_state_for,
)

logger = logging.getLogger(__name__)

MENU_PROMPT = "Please select the value you wish to change"
START_LABEL = "Start server now"
EXIT_LABEL = "Exit"
SET_VALUE_LABEL = "Set a value"
USE_DEFAULT_LABEL = "Use the server default"


def format_value(value: TypedValue) -> str:
    """Render a typed value for menu labels."""
    if isinstance(value, Boolean):
        return "on" if value.value else "off"
    if value.value is None:
        return "default"
    return str(value.value)


class EditorController:
    """Runs one interactive editing session."""

    def __init__(
        self,
        machine: Machine,
        prompter: Prompter,
        store: ConfigurationStore,
        launcher: ServerLauncher,
        catalogue: Sequence[OptionDescriptor] = CATALOGUE,
    ):
        self._machine = machine
        self._prompter = prompter
        self._store = store
        self._launcher = launcher
        self._catalogue = tuple(catalogue)
        self._exit_code = 0

    def run(self) -> int:
        """Loop until the machine exits; return the server's exit code."""
        while self._machine.state is not AppState.EXITED:
            self.step()
        return self._exit_code

    def step(self) -> None:
        """Handle a single interaction for the current state."""
        state = self._machine.state
        if state is AppState.CHOICE_MENU:
            self._choose_action()
        elif state is AppState.EDITING_CONFIGURATION:
            self._edit_selected_option()
        elif state is AppState.RUNNING:
            self._start_server()

    def menu_labels(self) -> list[str]:
        configuration = self._machine.configuration
        labels = [START_LABEL, EXIT_LABEL]
        for option in self._catalogue:
            labels.append(f"{option.name}: {format_value(configuration.get(option.property))}")
        return labels

    def _choose_action(self) -> None:
        index = self._prompter.select(MENU_PROMPT, self.menu_labels())
        if index is None or index == 1:
            self._machine.dispatch(AppEvent.EXIT)
        elif index == 0:
            self._machine.dispatch(AppEvent.START_SERVER)
        elif 2 <= index < len(self._catalogue) + 2:
            self._machine.dispatch(AppEvent.SELECTED_OPTION, self._catalogue[index - 2])
        else:
            logger.warning("Menu returned unknown index %s", index)

    def _edit_selected_option(self) -> None:
        option = self._machine.selected_option
        editor_state = self._machine.editor_state
        current = self._machine.configuration.get(option.property)

        if editor_state is editor_state_for(option.shape) and option.description:
            self._prompter.show(option.description)

        if editor_state is EditorState.SELECT_ON_OFF:
            event, payload = self._ask_on_off(option, current)
        elif editor_state is EditorState.SELECT_VALUE_OR_NONE:
            event, payload = self._ask_value_or_none(option, current)
        elif editor_state is EditorState.NUMBER_INPUT:
            event, payload = self._ask_number(option, current)
        else:
            event, payload = self._ask_text(option, current)

        self._machine.dispatch(event, payload)
        if self._machine.state is AppState.CHOICE_MENU and event is not EditorEvent.CANCEL:
            self._store.save(self._machine.configuration)

    def _ask_on_off(
        self, option: OptionDescriptor, current: TypedValue
    ) -> tuple[Event, Payload | None]:
        answer = self._prompter.confirm(f"Enable {option.name.lower()}?", default=bool(current.value))
        if answer is None:
            return EditorEvent.CANCEL, None
        return EditorEvent.SUBMIT_VALUE, Boolean(answer)

    def _ask_value_or_none(
        self, option: OptionDescriptor, current: TypedValue
    ) -> tuple[Event, Payload | None]:
        default = 0 if current.value is not None else 1
        index = self._prompter.select(option.name, [SET_VALUE_LABEL, USE_DEFAULT_LABEL], default=default)
        if index is None:
            return EditorEvent.CANCEL, None
        if index == 0:
            return EditorEvent.SELECTED_VALUE, None
        return EditorEvent.SELECTED_NONE, None

    def _ask_number(
        self, option: OptionDescriptor, current: TypedValue
    ) -> tuple[Event, Payload | None]:
        number = self._prompter.integer(option.name, PORT_MIN, PORT_MAX, default=current.value)
        if number is None:
            return EditorEvent.CANCEL, None
        return EditorEvent.SUBMIT_VALUE, OptionalInteger(number)

    def _ask_text(
        self, option: OptionDescriptor, current: TypedValue
    ) -> tuple[Event, Payload | None]:
        text = self._prompter.text(option.name, default=current.value)
        if text is None:
            return EditorEvent.CANCEL, None
        # Blank input falls back to the server default.
        return EditorEvent.SUBMIT_VALUE, OptionalText(text.strip() or None)

    def _start_server(self) -> None:
        configuration = self._machine.configuration
        self._store.save(configuration)
        self._prompter.show("Starting the server...")
        self._exit_code = self._launcher.launch(configuration)
        logger.info("Server exited with code %s", self._exit_code)
        if self._exit_code != 0:
            self._prompter.show(
                f"The server stopped with exit code {self._exit_code}, see the log for details."
            )
        self._machine.dispatch(AppEvent.EXIT)
