"""Tests for depbump.config."""

from __future__ import annotations

from depbump.config import load_credentials, load_settings


def test_reads_both_credentials() -> None:
    creds = load_credentials({"GITHUB_USERNAME": "octocat", "GITHUB_PASSWORD": "pw"})

    assert creds.username == "octocat"
    assert creds.password.get_secret_value() == "pw"
    assert creds.is_complete


def test_missing_password_is_incomplete() -> None:
    creds = load_credentials({"GITHUB_USERNAME": "octocat"})

    assert creds.password is None
    assert not creds.is_complete


def test_empty_values_count_as_missing() -> None:
    creds = load_credentials({"GITHUB_USERNAME": "", "GITHUB_PASSWORD": ""})

    assert creds.username is None
    assert creds.password is None


def test_defaults_to_process_environment(monkeypatch) -> None:
    monkeypatch.setenv("GITHUB_USERNAME", "from-env")
    monkeypatch.setenv("GITHUB_PASSWORD", "secret")

    assert load_credentials().username == "from-env"


def test_settings_defaults() -> None:
    settings = load_settings({})

    assert settings.base_branch == "master"
    assert settings.remote == "origin"
    assert settings.manifest_name == "package.json"
    assert not settings.credentials.is_complete


def test_settings_overrides() -> None:
    settings = load_settings(
        {"GITHUB_USERNAME": "u", "GITHUB_PASSWORD": "p"},
        base_branch="main",
        remote="upstream",
        manifest_name="web/package.json",
    )

    assert settings.base_branch == "main"
    assert settings.remote == "upstream"
    assert settings.manifest_name == "web/package.json"
    assert settings.credentials.is_complete
