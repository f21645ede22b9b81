"""Tests for log-safe identifier helper functions."""

from clario_bot.utils.identifiers import (
    clear_log_safe_participant_cache,
    get_log_safe_participant_id,
)

PSEUDONYM_LENGTH = 16


def test_get_log_safe_participant_id_is_deterministic(monkeypatch) -> None:
    """Same id + secret should always yield the same pseudonym."""
    monkeypatch.setenv("LOG_PSEUDONYM_SECRET", "deterministic-secret")
    clear_log_safe_participant_cache()

    token_first = get_log_safe_participant_id("29:1a2b3c")
    token_second = get_log_safe_participant_id("29:1a2b3c")

    assert token_first == token_second
    assert len(token_first) == PSEUDONYM_LENGTH
    clear_log_safe_participant_cache()


def test_get_log_safe_participant_id_varies_by_input_and_secret(monkeypatch) -> None:
    """Changing the id or secret should change the pseudonym output."""
    monkeypatch.setenv("LOG_PSEUDONYM_SECRET", "deterministic-secret")
    clear_log_safe_participant_cache()
    base_token = get_log_safe_participant_id("29:1a2b3c")

    clear_log_safe_participant_cache()
    monkeypatch.setenv("LOG_PSEUDONYM_SECRET", "alternate-secret")
    different_secret_token = get_log_safe_participant_id("29:1a2b3c")

    clear_log_safe_participant_cache()
    monkeypatch.setenv("LOG_PSEUDONYM_SECRET", "deterministic-secret")
    different_user_token = get_log_safe_participant_id("29:9z8y7x")

    assert base_token != different_secret_token
    assert base_token != different_user_token
    clear_log_safe_participant_cache()


def test_without_secret_ids_are_masked(monkeypatch) -> None:
    monkeypatch.delenv("LOG_PSEUDONYM_SECRET", raising=False)

    assert get_log_safe_participant_id("user-123456") == "***3456"
