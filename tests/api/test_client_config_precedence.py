from __future__ import annotations

from pathlib import Path

import pytest

from blaze.api.config import ClientSettings
from blaze.api.errors import ApiConfigError

_ENV_KEYS = ["BLAZE_PROJECT_ID", "BLAZE_DATABASE", "BLAZE_PAGE_SIZE"]


def _write(tmp: Path, name: str, content: str) -> Path:
    p = tmp / name
    p.write_text(content)
    return p


def _clear_env(monkeypatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_client_settings_precedence_env_over_toml(tmp_path: Path, monkeypatch) -> None:
    # Arrange TOML
    _write(
        tmp_path,
        "blaze.toml",
        """
        [client]
        project_id = "toml-project"
        database = "toml-db"
        page_size = 50
        """.strip(),
    )
    monkeypatch.chdir(tmp_path)
    # Arrange ENV that should override TOML
    monkeypatch.setenv("BLAZE_PROJECT_ID", "env-project")
    monkeypatch.setenv("BLAZE_PAGE_SIZE", "10")
    monkeypatch.delenv("BLAZE_DATABASE", raising=False)

    s = ClientSettings.load()

    assert s.project_id == "env-project"
    assert s.database == "toml-db"  # not overridden
    assert s.page_size == 10


def test_client_settings_from_blaze_toml_top_level_keys(tmp_path: Path, monkeypatch) -> None:
    _write(tmp_path, "blaze.toml", 'project_id = "flat"\npage_size = 5\n')
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)

    s = ClientSettings.load()

    assert (s.project_id, s.database, s.page_size) == ("flat", "(default)", 5)


def test_client_settings_from_pyproject_tool_table(tmp_path: Path, monkeypatch) -> None:
    _write(
        tmp_path,
        "pyproject.toml",
        """
        [project]
        name = "app"

        [tool.blaze.client]
        project_id = "py-project"
        """.strip(),
    )
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)

    s = ClientSettings.load()

    assert s.project_id == "py-project"
    assert s.documents_path() == "projects/py-project/databases/(default)/documents"


def test_client_settings_explicit_path(tmp_path: Path, monkeypatch) -> None:
    cfg = _write(tmp_path, "custom.toml", '[client]\ndatabase = "analytics"\n')
    _clear_env(monkeypatch)

    assert ClientSettings.from_toml(cfg).database == "analytics"


def test_client_settings_defaults_when_no_config(tmp_path: Path, monkeypatch) -> None:
    # No TOML, no env
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)

    s = ClientSettings.load()

    assert s == ClientSettings()
    assert s.database == "(default)"
    assert s.page_size is None


@pytest.mark.parametrize("raw", ["abc", "0", "-3"])
def test_invalid_page_size_is_ignored(tmp_path: Path, monkeypatch, raw: str) -> None:
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)
    monkeypatch.setenv("BLAZE_PAGE_SIZE", raw)

    assert ClientSettings.load().page_size is None


def test_unparseable_toml_falls_back_to_defaults(tmp_path: Path, monkeypatch) -> None:
    _write(tmp_path, "blaze.toml", "project_id = [unterminated")
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)

    assert ClientSettings.load() == ClientSettings()


def test_documents_path_requires_project_id() -> None:
    with pytest.raises(ApiConfigError, match="project_id"):
        ClientSettings().documents_path()
    assert (
        ClientSettings(project_id="p", database="db").documents_path()
        == "projects/p/databases/db/documents"
    )
