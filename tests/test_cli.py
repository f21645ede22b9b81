"""Tests for the Typer CLI."""

from __future__ import annotations

from typer.testing import CliRunner

from clario_bot.cli import main_app
from clario_bot.cli import bot as bot_cli
from clario_bot.core.exceptions import ClassificationUnavailable
from clario_bot.core.intents import IntentResult
from clario_bot.services.turn_pipeline import TURN_ERROR_MESSAGE

runner = CliRunner()


def test_routes_lists_every_intent(monkeypatch, services) -> None:
    monkeypatch.setattr(bot_cli, "_get_services", lambda: services)

    result = runner.invoke(main_app, ["bot", "routes"])

    assert result.exit_code == 0
    for intent in ("Greeting", "Help", "General_Info", "OnDevice_LogIn", "<default>"):
        assert intent in result.output


def test_chat_prints_replies(monkeypatch, services, classifier) -> None:
    classifier.results = [IntentResult("Greeting", 0.92)]
    monkeypatch.setattr(bot_cli, "_get_services", lambda: services)

    result = runner.invoke(main_app, ["bot", "chat", "good morning"])

    assert result.exit_code == 0
    assert "Hello." in result.output
    assert classifier.calls == ["good morning"]


def test_chat_reports_failures_as_apology(monkeypatch, services, classifier) -> None:
    classifier.error = ClassificationUnavailable("offline")
    monkeypatch.setattr(bot_cli, "_get_services", lambda: services)

    result = runner.invoke(main_app, ["bot", "chat", "hi"])

    assert result.exit_code == 0
    assert TURN_ERROR_MESSAGE in result.output


def test_card_prints_template(monkeypatch, services) -> None:
    monkeypatch.setattr(bot_cli, "_get_services", lambda: services)

    result = runner.invoke(main_app, ["bot", "card", "welcomeCard"])

    assert result.exit_code == 0
    assert "AdaptiveCard" in result.output


def test_unknown_card_exits_nonzero(monkeypatch, services) -> None:
    monkeypatch.setattr(bot_cli, "_get_services", lambda: services)

    result = runner.invoke(main_app, ["bot", "card", "missingCard"])

    assert result.exit_code == 1
    assert "welcomeCard" in result.output
