from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import tomli
import tomli_w
import yaml

__all__ = ["FORMATS", "detect_format", "loads", "dumps", "load_file"]

FORMATS = ("json", "yaml", "toml")


def detect_format(path: Path) -> str:
    ext = path.suffix.lower().lstrip(".")
    return {"yml": "yaml", "yaml": "yaml", "toml": "toml"}.get(ext, "json")


def _check(file_format: str) -> str:
    fmt = file_format.lower()
    if fmt not in FORMATS:
        raise ValueError(f"Unsupported file format '{file_format}'; expected one of {FORMATS}")
    return fmt


def loads(text: str, file_format: str = "json") -> Any:
    """Parse ``text`` into a plain data tree. Parser errors propagate."""
    fmt = _check(file_format)
    if fmt == "yaml":
        return yaml.safe_load(text)
    if fmt == "toml":
        return tomli.loads(text)
    return json.loads(text)


def dumps(data: Any, file_format: str = "json") -> str:
    """Render a data tree as pretty, human-editable text."""
    fmt = _check(file_format)
    if fmt == "yaml":
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    if fmt == "toml":
        return tomli_w.dumps(data)
    return json.dumps(data, indent=4, ensure_ascii=False) + "\n"


def load_file(path: Path, *, file_format: Optional[str] = None) -> Any:
    text = path.read_text(encoding="utf-8")
    return loads(text, file_format or detect_format(path))
