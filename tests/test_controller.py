import pytest

from msc.core.configuration import Boolean, OptionalInteger, OptionalText, ServerConfiguration
from msc.core.controller import (
    EXIT_LABEL,
    MENU_PROMPT,
    START_LABEL,
    EditorController,
    format_value,
)
from msc.core.options import CATALOGUE
from msc.core.ports import ConfigurationStore, Prompter, ServerLauncher
from msc.core.state_machine import (
    AppState,
    ContractViolation,
    EditorEvent,
    EditorState,
    Machine,
)

PORT_INDEX = 2 + [option.property.value for option in CATALOGUE].index("port")
DEMO_INDEX = 2 + [option.property.value for option in CATALOGUE].index("demo")
WORLD_INDEX = 2 + [option.property.value for option in CATALOGUE].index("world")


class _Prompter(Prompter):
    """Answers prompts from a script of (kind, answer) pairs."""

    def __init__(self, *answers):
        self.answers = list(answers)
        self.calls = []
        self.shown = []

    def _answer(self, kind, message, **details):
        self.calls.append((kind, message, details))
        expected, answer = self.answers.pop(0)
        assert expected == kind, f"asked {kind} ({message}) but script expected {expected}"
        return answer

    def select(self, message, choices, default=0):
        return self._answer("select", message, choices=list(choices), default=default)

    def confirm(self, message, default):
        return self._answer("confirm", message, default=default)

    def integer(self, message, minimum, maximum, default=None):
        return self._answer("integer", message, minimum=minimum, maximum=maximum, default=default)

    def text(self, message, default=None):
        return self._answer("text", message, default=default)

    def show(self, message):
        self.shown.append(message)


class _Store(ConfigurationStore):
    def __init__(self):
        self.saved = []

    def load(self):
        return ServerConfiguration()

    def save(self, configuration):
        self.saved.append(configuration.to_dict())


class _Launcher(ServerLauncher):
    def __init__(self, exit_code=0):
        self.exit_code = exit_code
        self.launched = []

    def launch(self, configuration):
        self.launched.append(configuration.to_dict())
        return self.exit_code


def _controller(prompter, configuration=None, launcher=None):
    machine = Machine(configuration or ServerConfiguration())
    store = _Store()
    launcher = launcher or _Launcher()
    return EditorController(machine, prompter, store, launcher), machine, store, launcher


def test_exit_from_menu():
    controller, machine, store, launcher = _controller(_Prompter(("select", 1)))
    assert controller.run() == 0
    assert machine.state == AppState.EXITED
    assert store.saved == []
    assert launcher.launched == []


def test_aborted_menu_exits():
    controller, machine, _, _ = _controller(_Prompter(("select", None)))
    controller.run()
    assert machine.state == AppState.EXITED


def test_menu_lists_actions_and_current_values():
    prompter = _Prompter(("select", 1))
    controller, _, _, _ = _controller(prompter, ServerConfiguration(port=25565))
    controller.run()

    kind, message, details = prompter.calls[0]
    assert message == MENU_PROMPT
    assert details["choices"][:2] == [START_LABEL, EXIT_LABEL]
    assert details["choices"][PORT_INDEX] == "Port: 25565"
    assert details["choices"][DEMO_INDEX] == "Demo mode: off"
    assert len(details["choices"]) == len(CATALOGUE) + 2


def test_set_port_then_exit():
    prompter = _Prompter(
        ("select", PORT_INDEX),
        ("select", 0),
        ("integer", 25565),
        ("select", 1),
    )
    controller, machine, store, _ = _controller(prompter)
    controller.run()

    assert machine.configuration.port == 25565
    assert store.saved[-1]["port"] == 25565
    assert len(store.saved) == 1
    assert prompter.calls[2][2]["minimum"] == 1
    assert prompter.calls[2][2]["maximum"] == 65535
    assert "Which port to listen on" in prompter.shown[0]


def test_use_default_clears_value():
    prompter = _Prompter(("select", WORLD_INDEX), ("select", 1), ("select", 1))
    controller, machine, store, _ = _controller(prompter, ServerConfiguration(world="old"))
    controller.run()

    assert machine.configuration.world is None
    assert store.saved[-1]["world"] is None
    assert prompter.calls[1][2]["default"] == 0


def test_blank_text_means_default():
    prompter = _Prompter(("select", WORLD_INDEX), ("select", 0), ("text", "   "), ("select", 1))
    controller, machine, _, _ = _controller(prompter, ServerConfiguration(world="old"))
    controller.run()
    assert machine.configuration.world is None


def test_empty_description_is_not_shown():
    prompter = _Prompter(("select", WORLD_INDEX), ("select", None), ("select", 1))
    controller, _, _, _ = _controller(prompter)
    controller.run()
    assert prompter.shown == []


def test_text_is_stripped():
    prompter = _Prompter(("select", WORLD_INDEX), ("select", 0), ("text", " new world "), ("select", 1))
    controller, machine, _, _ = _controller(prompter)
    controller.run()
    assert machine.configuration.world == "new world"


def test_toggle_boolean():
    prompter = _Prompter(("select", DEMO_INDEX), ("confirm", True), ("select", 1))
    controller, machine, store, _ = _controller(prompter)
    controller.run()

    assert machine.configuration.demo is True
    assert store.saved[-1]["demo"] is True
    assert prompter.calls[1][2]["default"] is False


@pytest.mark.parametrize(
    "script",
    [
        [("select", DEMO_INDEX), ("confirm", None)],
        [("select", PORT_INDEX), ("select", None)],
        [("select", PORT_INDEX), ("select", 0), ("integer", None)],
        [("select", WORLD_INDEX), ("select", 0), ("text", None)],
    ],
)
def test_aborted_edit_is_abandoned(script):
    prompter = _Prompter(*script, ("select", 1))
    controller, machine, store, _ = _controller(prompter)
    controller.run()

    assert machine.configuration == ServerConfiguration()
    assert store.saved == []


def test_start_server_saves_and_launches():
    launcher = _Launcher(exit_code=3)
    prompter = _Prompter(("select", 0))
    controller, machine, store, launcher = _controller(prompter, ServerConfiguration(gui=True), launcher)

    assert controller.run() == 3
    assert machine.state == AppState.EXITED
    assert launcher.launched == [ServerConfiguration(gui=True).to_dict()]
    assert store.saved == launcher.launched


def test_failed_launch_is_reported():
    prompter = _Prompter(("select", 0))
    controller, machine, _, _ = _controller(prompter, launcher=_Launcher(exit_code=127))

    assert controller.run() == 127
    assert machine.state == AppState.EXITED
    assert len(prompter.shown) == 2
    assert "exit code 127" in prompter.shown[-1]


def test_clean_server_exit_shows_no_error():
    prompter = _Prompter(("select", 0))
    controller, _, _, _ = _controller(prompter)
    controller.run()
    assert prompter.shown == ["Starting the server..."]


def test_step_handles_one_interaction():
    prompter = _Prompter(("select", PORT_INDEX), ("select", 0))
    controller, machine, _, _ = _controller(prompter)

    controller.step()
    assert machine.editor_state == EditorState.SELECT_VALUE_OR_NONE
    controller.step()
    assert machine.editor_state == EditorState.NUMBER_INPUT


def test_unknown_menu_index_is_ignored():
    prompter = _Prompter(("select", 99), ("select", 1))
    controller, machine, _, _ = _controller(prompter)
    controller.step()
    assert machine.state == AppState.CHOICE_MENU
    controller.run()
    assert machine.state == AppState.EXITED


def test_malformed_prompt_answer_raises():
    class _BrokenPrompter(_Prompter):
        def confirm(self, message, default):
            return "yes"

    prompter = _BrokenPrompter(("select", DEMO_INDEX))
    controller, _, _, _ = _controller(prompter)
    controller.step()
    with pytest.raises(ValueError):
        controller.step()


def test_contract_violations_are_not_swallowed():
    prompter = _Prompter(("select", DEMO_INDEX))
    controller, machine, _, _ = _controller(prompter)
    controller.step()
    with pytest.raises(ContractViolation):
        machine.dispatch(EditorEvent.SUBMIT_VALUE, OptionalInteger(25565))
    assert machine.selected_option is CATALOGUE[DEMO_INDEX - 2]
    assert machine.phase != AppState.CHOICE_MENU


def test_format_value():
    assert format_value(Boolean(True)) == "on"
    assert format_value(Boolean(False)) == "off"
    assert format_value(OptionalInteger(None)) == "default"
    assert format_value(OptionalText("w")) == "w"
