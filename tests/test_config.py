import textwrap
from pathlib import Path

import pytest

from flagline.config import find_config, import_action, load_registry
from flagline.exceptions import ConfigError, InvalidParameterError
from flagline.parser.parser_types import DataType

ACTIONS = """
CALLS = []


def greet(name, times, verbose):
    CALLS.append((name, times, verbose))
    return name * times


NOT_CALLABLE = 3
"""


@pytest.fixture
def actions(tmp_path, monkeypatch):
    (tmp_path / "flagline_sample_actions.py").write_text(ACTIONS)
    monkeypatch.syspath_prepend(str(tmp_path))
    return tmp_path


@pytest.fixture(autouse=True)
def isolated_lookup(tmp_path, monkeypatch):
    home = tmp_path / "home"
    home.mkdir()
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.setattr(Path, "home", lambda: home)
    monkeypatch.chdir(work)
    monkeypatch.delenv("FLAGLINE_CONFIG", raising=False)
    return home, work


def write(path: Path, content: str) -> Path:
    path.write_text(textwrap.dedent(content))
    return path


def test_load_yaml(actions):
    config = write(
        actions / "commands.yaml",
        """
        commands:
          - name: greet
            description: Say hello
            action: flagline_sample_actions.greet
            parameters:
              - "--name"
              - aliases: ["--times", "--count"]
                data_type: number
                range: "[1, 10]"
                default: 1
              - "-v"
          - name: status
        """,
    )
    registry = load_registry(config)
    assert set(registry.commands) == {"greet", "status"}
    greet = registry.lookup("greet")
    assert greet.description == "Say hello"
    assert greet.parameters[1].data_type is DataType.NUMBER
    assert greet.parameters[1].default == "1"
    assert registry.evaluate("greet --name=ab --count=2 -v") == ["ab", 2, True]
    assert registry.evaluate("greet --name=ab") == ["ab", 1, False]
    assert registry.lookup("status").action is None


def test_load_toml(actions):
    config = write(
        actions / "commands.toml",
        """
        [[commands]]
        name = "greet"
        action = "flagline_sample_actions.greet"
        parameters = ["--name", "--times=number,3", "-v,true"]
        """,
    )
    registry = load_registry(str(config))
    assert registry.evaluate("greet --name=x") == ["x", 3, True]


@pytest.mark.asyncio
async def test_loaded_action_runs(actions):
    config = write(
        actions / "commands.yaml",
        """
        commands:
          - name: greet
            action: flagline_sample_actions.greet
            parameters: ["--name", "--times=number,2", "-v"]
        """,
    )
    registry = load_registry(config)
    assert await registry.execute("greet --name=ab") == "abab"


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_registry(tmp_path / "missing.yaml")


def test_unsupported_suffix(tmp_path):
    config = write(tmp_path / "commands.json", "{}")
    with pytest.raises(ValueError, match="Unsupported config format"):
        load_registry(config)


@pytest.mark.parametrize("content", ["- just\n- a list\n", "title: no commands\n"])
def test_bad_structure(tmp_path, content):
    config = write(tmp_path / "commands.yaml", content)
    with pytest.raises(ValueError, match="list of commands"):
        load_registry(config)


def test_bad_path_type():
    with pytest.raises(TypeError):
        load_registry(42)


def test_invalid_parameter_in_config(tmp_path):
    config = write(
        tmp_path / "commands.yaml",
        """
        commands:
          - name: cmd
            parameters:
              - aliases: ["--x"]
                pattern: "^a"
                default: "b"
        """,
    )
    with pytest.raises(InvalidParameterError):
        load_registry(config)


def test_import_action(actions):
    assert callable(import_action("flagline_sample_actions.greet"))


@pytest.mark.parametrize(
    "path",
    [
        "greet",
        "flagline_no_such_module.greet",
        "flagline_sample_actions.missing",
        "flagline_sample_actions.NOT_CALLABLE",
    ],
)
def test_import_action_errors(actions, path):
    with pytest.raises(ConfigError):
        import_action(path)


def test_find_config_in_cwd(isolated_lookup):
    _, work = isolated_lookup
    config = work / "flagline.toml"
    config.touch()
    assert find_config() == config


def test_find_config_from_env(isolated_lookup, tmp_path, monkeypatch):
    config = tmp_path / "custom.yaml"
    config.touch()
    monkeypatch.setenv("FLAGLINE_CONFIG", str(config))
    assert find_config() == config


def test_find_config_global(isolated_lookup):
    home, _ = isolated_lookup
    config = home / ".config" / "flagline" / "flagline.yaml"
    config.parent.mkdir(parents=True)
    config.touch()
    assert find_config() == config


def test_find_config_none():
    assert find_config() is None
