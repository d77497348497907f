"""
Configuration for the blaze.api module.

Defines ClientSettings, a frozen dataclass carrying the project/database coordinates
used to build default parent paths, plus an optional default page size for listings.

Precedence
- env > TOML > defaults, via ClientSettings.load().
- Environment variables use the BLAZE_ prefix.
- TOML is read from ./blaze.toml ([client] table or top-level keys) or from
  ./pyproject.toml under [tool.blaze.client].

Notes
- Paths are opaque to the rest of the package; documents_path() is the only place a
  path is assembled.
- Credentials are never part of these settings.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from .errors import ApiConfigError

DEFAULT_DATABASE = "(default)"


@dataclass(frozen=True)
class ClientSettings:
    """
    Runtime settings for the blaze.api client.

    Attributes:
        project_id (str | None): Cloud project that owns the database.
        database (str): Database id (default "(default)").
        page_size (int | None): Default pageSize for list_documents when the caller
            passes none.

    Examples:
        >>> from blaze.api.config import ClientSettings
        >>> ClientSettings(project_id="demo").documents_path()
        'projects/demo/databases/(default)/documents'
    """

    project_id: str | None = None
    database: str = DEFAULT_DATABASE
    page_size: int | None = None

    def documents_path(self) -> str:
        """
        Root documents path for this project/database.

        Raises:
            ApiConfigError: If project_id is unset.
        """
        if not self.project_id:
            raise ApiConfigError("project_id is required to build a documents path")
        return f"projects/{self.project_id}/databases/{self.database}/documents"

    # Configuration loaders (env/TOML) with precedence: env > TOML > defaults.

    @classmethod
    def _apply_mapping(cls, base: ClientSettings, cfg: dict[str, Any] | None) -> ClientSettings:
        """Apply a loose config mapping onto ClientSettings, returning a new instance."""
        if not isinstance(cfg, dict):
            return base

        s = base

        if "project_id" in cfg and isinstance(cfg["project_id"], str) and cfg["project_id"]:
            s = replace(s, project_id=cfg["project_id"])

        if "database" in cfg and isinstance(cfg["database"], str) and cfg["database"]:
            s = replace(s, database=cfg["database"])

        if "page_size" in cfg:
            try:
                size = int(cfg["page_size"])
            except (TypeError, ValueError):
                size = None
            if size is not None and size > 0:
                s = replace(s, page_size=size)

        return s

    @classmethod
    def from_env(
        cls, base: ClientSettings | None = None, prefix: str = "BLAZE_"
    ) -> ClientSettings:
        """
        Build ClientSettings from environment variables. Precedence is env > base > defaults.

        Recognized variables:
            - BLAZE_PROJECT_ID
            - BLAZE_DATABASE
            - BLAZE_PAGE_SIZE (non-integer or non-positive values are ignored)
        """
        s = base or cls()

        def get(name: str) -> str | None:
            return os.getenv(prefix + name)

        mapping: dict[str, Any] = {}
        v = get("PROJECT_ID")
        if v:
            mapping["project_id"] = v
        v = get("DATABASE")
        if v:
            mapping["database"] = v
        v = get("PAGE_SIZE")
        if v:
            mapping["page_size"] = v

        return cls._apply_mapping(s, mapping)

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str] | None = None) -> ClientSettings:
        """
        Build ClientSettings from a TOML file.

        Search order when `path` is None:
            1) ./blaze.toml (with either a [client] table or direct keys)
            2) ./pyproject.toml under [tool.blaze.client]

        Returns defaults if no file is present or it cannot be parsed.
        """
        s = cls()

        def _load_toml(p: Path) -> dict[str, Any] | None:
            try:
                with p.open("rb") as fh:
                    return tomllib.load(fh)
            except (OSError, tomllib.TOMLDecodeError):
                return None

        cfg: dict[str, Any] | None = None

        cand: list[Path] = []
        if path is not None:
            cand.append(Path(path))
        else:
            cand.append(Path.cwd() / "blaze.toml")
            cand.append(Path.cwd() / "pyproject.toml")

        for p in cand:
            if not p.exists():
                continue
            data = _load_toml(p)
            if not isinstance(data, dict):
                continue
            if p.name == "pyproject.toml":
                tool = data.get("tool", {})
                blaze = tool.get("blaze", {}) if isinstance(tool, dict) else {}
                cfg = blaze.get("client") if isinstance(blaze, dict) else None
            else:
                top = data
                if "client" in top and isinstance(top["client"], dict):
                    cfg = top["client"]
                else:
                    cfg = top
            if cfg:
                break

        return cls._apply_mapping(s, cfg)

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> ClientSettings:
        """
        Load ClientSettings applying precedence: environment > TOML > defaults.

        Args:
            path: Optional explicit TOML path. If None, search defaults (blaze.toml, pyproject.toml).
        """
        s = cls.from_toml(path)
        s = cls.from_env(base=s)
        return s
