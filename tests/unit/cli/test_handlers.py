from pathlib import Path
from unittest.mock import MagicMock

import click
import pytest
import typer

from railrename.cli.handlers import TyperConfirmationHandler
from railrename.refactor import ReplaceContext, ReplaceDecision


def _context():
    return ReplaceContext(Path("app/models/user.rb"), 3, "  User.find(1)", "User", "Account")


@pytest.fixture
def tty(monkeypatch):
    monkeypatch.setattr("sys.stdin", MagicMock(isatty=MagicMock(return_value=True)))


@pytest.mark.parametrize(
    "key, expected",
    [
        ("y", ReplaceDecision.REPLACE),
        (" ", ReplaceDecision.REPLACE),
        ("!", ReplaceDecision.REPLACE_ALL),
        ("n", ReplaceDecision.DECLINE),
        ("Q", ReplaceDecision.DECLINE),
    ],
)
def test_single_key_decisions(tty, monkeypatch, key, expected):
    monkeypatch.setattr(click, "getchar", lambda: key)

    assert TyperConfirmationHandler().confirm_replacement(_context()) == expected


def test_unknown_key_asks_again(tty, monkeypatch, capsys):
    keys = iter(["x", "?", "y"])
    monkeypatch.setattr(click, "getchar", lambda: next(keys))

    decision = TyperConfirmationHandler().confirm_replacement(_context())

    assert decision == ReplaceDecision.REPLACE
    out = capsys.readouterr().out
    assert "app/models/user.rb:3" in out
    assert out.count("Invalid choice") == 2


def test_acknowledge_uses_confirm(tty, monkeypatch):
    confirm = MagicMock(return_value=True)
    monkeypatch.setattr(typer, "confirm", confirm)

    assert TyperConfirmationHandler().acknowledge("Go?") is True
    confirm.assert_called_once_with("Go?", default=False)


def test_without_terminal_everything_is_declined(monkeypatch):
    monkeypatch.setattr("sys.stdin", MagicMock(isatty=MagicMock(return_value=False)))
    getchar = MagicMock()
    monkeypatch.setattr(click, "getchar", getchar)
    handler = TyperConfirmationHandler()

    assert handler.acknowledge("Go?") is False
    assert handler.confirm_replacement(_context()) == ReplaceDecision.DECLINE
    getchar.assert_not_called()
