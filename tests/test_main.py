import logging
import sys
import textwrap
from pathlib import Path

import pytest

from flagline.__main__ import bootstrap, get_parser, main

ACTIONS = """
CALLS = []


def greet(name, verbose):
    CALLS.append((name, verbose))
"""


@pytest.fixture(autouse=True)
def isolated(tmp_path, monkeypatch):
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setattr(Path, "home", lambda: home)
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("FLAGLINE_CONFIG", raising=False)
    monkeypatch.setattr(sys, "path", list(sys.path))
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield tmp_path
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def config(isolated):
    (isolated / "flagline_main_actions.py").write_text(ACTIONS)
    path = isolated / "flagline.yaml"
    path.write_text(
        textwrap.dedent(
            """
            commands:
              - name: greet
                description: Say hello
                action: flagline_main_actions.greet
                parameters: ["--name", "-v"]
            """
        )
    )
    return path


def test_get_parser():
    args = get_parser().parse_args(["commands.yaml", "greet --name=x", "--help-commands"])
    assert args.config == "commands.yaml"
    assert args.line == "greet --name=x"
    assert args.help_commands


def test_bootstrap_finds_config_and_extends_path(config):
    assert bootstrap(None) == config
    assert str(config.parent.resolve()) in sys.path


def test_bootstrap_without_config():
    assert bootstrap(None) is None


def test_main_executes_line(config):
    assert main([str(config), "greet --name=Ada -v"]) == 0
    import flagline_main_actions

    assert flagline_main_actions.CALLS[-1] == ("Ada", True)


def test_main_reports_evaluation_errors(config, capsys):
    assert main([str(config), "greet -v"]) == 1
    assert "MissingDefault" in capsys.readouterr().out


def test_main_help_commands(config, capsys):
    assert main([str(config), "--help-commands"]) == 0
    assert "Say hello" in capsys.readouterr().out


def test_main_without_config(capsys):
    assert main([]) == 1


def test_main_missing_config_file(isolated):
    assert main([str(isolated / "missing.yaml"), "greet"]) == 1
