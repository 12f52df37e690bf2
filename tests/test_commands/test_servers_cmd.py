"""CLI tests for ``quickauth servers``."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from quickauth.app import app
from quickauth.config import JsonFileStore
from quickauth.registry import ServerRegistry


@pytest.fixture
def invoke(cli_runner, isolated_config):
    def _invoke(*args: str):
        return cli_runner.invoke(app, ["--no-color", *args])

    return _invoke


def _stored(isolated_config: Path) -> list[str]:
    path = isolated_config / "config" / "quickauth" / "data.json"
    return json.loads(path.read_text())["authServers"]


def _seed(*urls: str) -> None:
    registry = ServerRegistry(JsonFileStore())
    for url in urls:
        registry.add(url)


class TestList:
    def test_empty(self, invoke) -> None:
        result = invoke("servers", "list")
        assert result.exit_code == 0
        assert "No servers registered" in result.output
        assert "quickauth servers add" in result.output

    def test_plain_rows_in_order(self, invoke) -> None:
        _seed("https://b.example.com", "https://a.example.com")

        result = invoke("--plain", "servers", "list")

        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        assert lines == ["#\tURL", "1\thttps://b.example.com", "2\thttps://a.example.com"]

    def test_json(self, invoke) -> None:
        _seed("https://dav.example.com")

        result = invoke("--json", "servers", "list")

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == [{"#": "1", "URL": "https://dav.example.com"}]


class TestAdd:
    def test_adds_and_persists(self, invoke, isolated_config) -> None:
        result = invoke("servers", "add", "https://dav.example.com")

        assert result.exit_code == 0, result.output
        assert "Added https://dav.example.com" in result.output
        assert _stored(isolated_config) == ["https://dav.example.com"]

    def test_invalid_url(self, invoke, isolated_config) -> None:
        result = invoke("servers", "add", "dav.example.com")

        assert result.exit_code == 2
        assert "Please enter a valid URL" in result.output
        assert not (isolated_config / "config" / "quickauth" / "data.json").exists()

    def test_duplicate(self, invoke, isolated_config) -> None:
        _seed("https://dav.example.com")

        result = invoke("servers", "add", "https://dav.example.com")

        assert result.exit_code == 2
        assert "This server URL already exists" in result.output
        assert _stored(isolated_config) == ["https://dav.example.com"]


class TestEdit:
    def test_edit_by_position(self, invoke, isolated_config) -> None:
        _seed("https://a.example.com", "https://b.example.com")

        result = invoke("servers", "edit", "1", "https://c.example.com")

        assert result.exit_code == 0, result.output
        assert _stored(isolated_config) == ["https://c.example.com", "https://b.example.com"]

    def test_same_value_is_noop(self, invoke, isolated_config) -> None:
        _seed("https://a.example.com")

        result = invoke("servers", "edit", "https://a.example.com", "https://a.example.com")

        assert result.exit_code == 0
        assert "Nothing to change" in result.output

    def test_unknown_server(self, invoke) -> None:
        result = invoke("servers", "edit", "https://x.example.com", "https://y.example.com")
        assert result.exit_code == 4
        assert "is not registered" in result.output

    def test_duplicate_target(self, invoke, isolated_config) -> None:
        _seed("https://a.example.com", "https://b.example.com")

        result = invoke("servers", "edit", "2", "https://a.example.com")

        assert result.exit_code == 2
        assert _stored(isolated_config) == ["https://a.example.com", "https://b.example.com"]


class TestRemove:
    def test_remove_by_url(self, invoke, isolated_config) -> None:
        _seed("https://a.example.com", "https://b.example.com")

        result = invoke("servers", "remove", "https://a.example.com")

        assert result.exit_code == 0, result.output
        assert "Removed https://a.example.com" in result.output
        assert _stored(isolated_config) == ["https://b.example.com"]

    def test_remove_by_position(self, invoke, isolated_config) -> None:
        _seed("https://a.example.com", "https://b.example.com")

        result = invoke("servers", "remove", "2")

        assert result.exit_code == 0, result.output
        assert _stored(isolated_config) == ["https://a.example.com"]

    def test_unknown(self, invoke) -> None:
        result = invoke("servers", "remove", "https://nope.example.com")
        assert result.exit_code == 4


def test_corrupt_settings_file_is_reported(invoke, isolated_config) -> None:
    path = isolated_config / "config" / "quickauth" / "data.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("{broken")

    result = invoke("servers", "list")

    assert result.exit_code != 0
    assert "Invalid settings" in str(result.exception)
