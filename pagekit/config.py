"""Configuration support for pagekit."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .errors import ConfigError

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover - fallback for older interpreters
    tomllib = None  # type: ignore

VIEWS_DIR = Path(__file__).resolve().parent / "templates" / "views"


@dataclass
class PageKitConfig:
    """Settings shared by the push registries and the template layer."""

    client_namespace: str = "pagekit"
    merge_function: Optional[str] = None
    indent: str = "  "
    strict_patterns: bool = True
    partial_paths: List[Path] = field(default_factory=list)
    views_dir: Path = VIEWS_DIR
    template_extension: str = ".html"
    autoescape: bool = False
    date_format: str = "%Y-%m-%d"
    raw: Dict[str, Any] = field(default_factory=dict)


def _read_json_config(path: Path) -> Dict[str, Any]:
    content = path.read_text(encoding="utf-8")
    try:
        return json.loads(content)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON: {exc.msg}", path=str(path)) from exc


def _read_toml_config(path: Path) -> Dict[str, Any]:
    if tomllib is None:
        raise ConfigError("TOML parsing requires Python 3.11 or later.", path=str(path))
    with path.open("rb") as handle:
        try:
            data = tomllib.load(handle)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Invalid TOML: {exc}", path=str(path)) from exc
    return data.get("pagekit") or {}


def _resolve_path(raw: Any, root: Path) -> Path:
    path = Path(os.path.expandvars(str(raw)))
    if not path.is_absolute():
        path = (root / path).resolve()
    return path


def _parse_partial_paths(section: Dict[str, Any], root: Path) -> List[Path]:
    values = section.get("partial_paths") or []
    if isinstance(values, (str, os.PathLike)):
        values = [values]
    elif not isinstance(values, (list, tuple)):
        raise ConfigError("partial_paths must be a string or a list of strings")
    return [_resolve_path(value, root) for value in values]


def parse_config(data: Dict[str, Any], root: Path) -> PageKitConfig:
    """Build a :class:`PageKitConfig` from an already-decoded mapping."""

    defaults = PageKitConfig()
    views_raw = data.get("views_dir")
    views_dir = _resolve_path(views_raw, root) if views_raw else defaults.views_dir
    return PageKitConfig(
        client_namespace=str(data.get("client_namespace") or defaults.client_namespace),
        merge_function=str(data["merge_function"]) if data.get("merge_function") else None,
        indent=str(data.get("indent", defaults.indent)),
        strict_patterns=bool(data.get("strict_patterns", defaults.strict_patterns)),
        partial_paths=_parse_partial_paths(data, root),
        views_dir=views_dir,
        template_extension=str(data.get("template_extension") or defaults.template_extension),
        autoescape=bool(data.get("autoescape", defaults.autoescape)),
        date_format=str(data.get("date_format") or defaults.date_format),
        raw=dict(data),
    )


def locate_config_file(root: Path, explicit: Optional[Path] = None) -> Optional[Path]:
    if explicit is not None:
        return explicit if explicit.exists() else None
    candidates = ["pagekit.toml", ".pagekitrc"]
    for candidate in candidates:
        path = root / candidate
        if path.exists():
            return path
    return None


def load_config(root: Path, explicit: Optional[Path] = None) -> PageKitConfig:
    root = root.resolve()
    config_path = locate_config_file(root, explicit)
    if config_path is None:
        return PageKitConfig()

    if config_path.suffix == ".toml":
        data = _read_toml_config(config_path)
    else:
        data = _read_json_config(config_path)
    if not isinstance(data, dict):
        raise ConfigError("Configuration root must be a table/object", path=str(config_path))
    return parse_config(data, root)


__all__ = [
    "PageKitConfig",
    "VIEWS_DIR",
    "parse_config",
    "locate_config_file",
    "load_config",
]
