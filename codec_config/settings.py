from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from . import formats

__all__ = ["CodecConfigSettings", "resolve_config_path", "resolve_file_format"]


class CodecConfigSettings(BaseSettings):
    """Host-side defaults, read from ``CODEC_CONFIG_*`` environment variables."""

    config_dir: Path = Field(
        default_factory=lambda: Path(tempfile.gettempdir()) / "codec_config",
        description="Directory that relative config names are resolved against.",
    )
    file_format: Optional[Literal["json", "yaml", "toml"]] = Field(
        default=None,
        description="Force one text format instead of detecting it from the file suffix.",
    )

    model_config = SettingsConfigDict(env_prefix="CODEC_CONFIG_", extra="ignore")


def resolve_config_path(
    name: str | os.PathLike, config_dir: str | os.PathLike | None = None
) -> Path:
    """Absolute names are kept; relative ones live under the config directory."""
    p = Path(name).expanduser()
    if p.is_absolute():
        return p
    root = Path(config_dir) if config_dir is not None else CodecConfigSettings().config_dir
    return root.expanduser() / p


def resolve_file_format(path: Path, file_format: Optional[str] = None) -> str:
    """Explicit format, then ``CODEC_CONFIG_FILE_FORMAT``, then the suffix."""
    return file_format or CodecConfigSettings().file_format or formats.detect_format(path)
