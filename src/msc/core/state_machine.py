"""Two-level state machine for the configuration editor.

The outer level picks between the choice menu, editing a setting, running the
server and exiting. While a setting is being edited, the inner level tracks
which kind of input is expected for it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
import logging
from typing import Union

from .configuration import Boolean, OptionalInteger, OptionalText, ServerConfiguration, TypedValue
from .options import OptionDescriptor, OptionShape, Scalar

logger = logging.getLogger(__name__)


class ContractViolation(RuntimeError):
    """The caller dispatched something the current state can never accept."""


class AppState(Enum):
    CHOICE_MENU = auto()
    RUNNING = auto()
    EXITED = auto()
    EDITING_CONFIGURATION = auto()


class AppEvent(Enum):
    START_SERVER = auto()
    EXIT = auto()
    SELECTED_OPTION = auto()


class EditorState(Enum):
    SELECT_ON_OFF = auto()
    NUMBER_INPUT = auto()
    TEXT_INPUT = auto()
    SELECT_VALUE_OR_NONE = auto()


class EditorEvent(Enum):
    SUBMIT_VALUE = auto()
    SELECTED_VALUE = auto()
    SELECTED_NONE = auto()
    CANCEL = auto()


Event = Union[AppEvent, EditorEvent]
Payload = Union[OptionDescriptor, TypedValue]


@dataclass(frozen=True)
class Editing:
    """Phase of the machine while ``option`` is being edited."""

    option: OptionDescriptor
    editor_state: EditorState


Phase = Union[AppState, Editing]


_APP_TRANSITIONS = {
    AppState.CHOICE_MENU: {
        AppEvent.START_SERVER: AppState.RUNNING,
        AppEvent.EXIT: AppState.EXITED,
    },
    AppState.RUNNING: {
        AppEvent.EXIT: AppState.EXITED,
    },
}

_SUBMITTED_VARIANTS = {
    EditorState.SELECT_ON_OFF: Boolean,
    EditorState.NUMBER_INPUT: OptionalInteger,
    EditorState.TEXT_INPUT: OptionalText,
}

_VALUE_EDITORS = {
    Scalar.BOUNDED_INTEGER: EditorState.NUMBER_INPUT,
    Scalar.TEXT: EditorState.TEXT_INPUT,
}

_ABSENT_VALUES = {
    Scalar.BOUNDED_INTEGER: OptionalInteger(None),
    Scalar.TEXT: OptionalText(None),
}


def editor_state_for(shape: OptionShape) -> EditorState:
    """Pick the first editor for ``shape``; presence is always asked first."""
    if shape.optional:
        return EditorState.SELECT_VALUE_OR_NONE
    if shape.scalar is Scalar.BOOLEAN:
        return EditorState.SELECT_ON_OFF
    if shape.scalar is Scalar.BOUNDED_INTEGER:
        return EditorState.NUMBER_INPUT
    return EditorState.TEXT_INPUT


class Machine:
    def __init__(self, configuration: ServerConfiguration | None = None):
        self._phase: Phase = AppState.CHOICE_MENU
        self._configuration = configuration if configuration is not None else ServerConfiguration()

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def state(self) -> AppState:
        if isinstance(self._phase, Editing):
            return AppState.EDITING_CONFIGURATION
        return self._phase

    @property
    def editor_state(self) -> EditorState | None:
        if isinstance(self._phase, Editing):
            return self._phase.editor_state
        return None

    @property
    def selected_option(self) -> OptionDescriptor | None:
        if isinstance(self._phase, Editing):
            return self._phase.option
        return None

    @property
    def configuration(self) -> ServerConfiguration:
        return self._configuration

    def dispatch(self, event: Event, payload: Payload | None = None) -> None:
        """Advance the machine by one event.

        Pairs not listed in the transition tables leave the machine unchanged.
        Raises ContractViolation for editor events outside of editing and for
        missing or mistyped payloads.
        """
        if isinstance(event, AppEvent):
            self._dispatch_app_event(event, payload)
        elif isinstance(event, EditorEvent):
            self._dispatch_editor_event(event, payload)
        else:
            raise ContractViolation(f"Unknown event {event!r}")

    def _dispatch_app_event(self, event: AppEvent, payload: Payload | None) -> None:
        state = self.state
        if state is AppState.CHOICE_MENU and event is AppEvent.SELECTED_OPTION:
            if not isinstance(payload, OptionDescriptor):
                raise ContractViolation(
                    f"SELECTED_OPTION needs an OptionDescriptor payload, got {payload!r}"
                )
            self._phase = Editing(payload, editor_state_for(payload.shape))
            logger.debug("Editing %s with %s", payload.property.value, self._phase.editor_state)
            return

        next_state = _APP_TRANSITIONS.get(state, {}).get(event)
        if next_state is None:
            self._ignore(event)
            return
        self._phase = next_state

    def _dispatch_editor_event(self, event: EditorEvent, payload: Payload | None) -> None:
        phase = self._phase
        if not isinstance(phase, Editing):
            raise ContractViolation(f"{event} was dispatched while not editing (state {self.state})")

        editor_state = phase.editor_state
        if event is EditorEvent.CANCEL:
            logger.debug("Abandoned edit of %s", phase.option.property.value)
            self._phase = AppState.CHOICE_MENU
            return

        if event is EditorEvent.SUBMIT_VALUE and editor_state in _SUBMITTED_VARIANTS:
            expected = _SUBMITTED_VARIANTS[editor_state]
            if not isinstance(payload, expected):
                raise ContractViolation(
                    f"{editor_state} expects a {expected.__name__} payload, got {payload!r}"
                )
            self._set_option_value(payload)
            return

        if editor_state is EditorState.SELECT_VALUE_OR_NONE:
            scalar = phase.option.shape.scalar
            if event is EditorEvent.SELECTED_VALUE:
                self._phase = Editing(phase.option, _VALUE_EDITORS[scalar])
                return
            if event is EditorEvent.SELECTED_NONE:
                self._set_option_value(_ABSENT_VALUES[scalar])
                return

        self._ignore(event)

    def _set_option_value(self, value: TypedValue) -> None:
        phase = self._phase
        if not isinstance(phase, Editing):
            raise ContractViolation("An option must be selected before its value is set")
        self._configuration.set(phase.option.property, value)
        logger.info("Set %s to %r", phase.option.property.value, value.value)
        self._phase = AppState.CHOICE_MENU

    def _ignore(self, event: Event) -> None:
        logger.warning("Invalid state transition: %s --%s--> (unchanged)", self._phase, event)
