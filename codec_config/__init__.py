# =============================================================
#  codec_config/__init__.py
# =============================================================
"""
Codec-Config
============

Versioned, file-backed configuration built on **Pydantic v2**.

Main ideas
~~~~~~~~~~
* Every schema version of a config is its own frozen Pydantic model deriving
  from :class:`VersionedConfig`. Older variants know how to
  ``upgrade_to_latest()``.
* One codec, built by :func:`build_codec`, writes a ``version`` key next to
  the fields and picks the right variant when reading.
* :func:`initialize_config` loads the file once at start-up, migrates it,
  rewrites outdated files and creates missing ones. It never raises; errors go
  to the logging callbacks and the default is returned.

Quick example
~~~~~~~~~~~~~
```python
from codec_config import ConfigType, VersionedConfig, build_codec, initialize_config

class CamV1(VersionedConfig):
    speed: int = 24_000

    def config_type(self):
        return CAM_V1

    def upgrade_to_latest(self):
        return CamV2(spindle_speed=self.speed)

    def auto_update_allowed(self):
        return True

class CamV2(VersionedConfig):
    spindle_speed: int = 24_000
    tool: str = "flat"

    def config_type(self):
        return CAM_V2

    def upgrade_to_latest(self):
        return self

    def auto_update_allowed(self):
        return True

CAM_V1 = ConfigType.of_model(1, CamV1)
CAM_V2 = ConfigType.of_model(2, CamV2)
CODEC = build_codec(2, {1: CAM_V1, 2: CAM_V2})

cfg = initialize_config("cam.json", CamV2(), CODEC, latest_version=2,
                        config_dir="~/my_project/config")
```
"""

from __future__ import annotations

from importlib import metadata as _meta
import logging as _logging

# --------------------------------------------------------------------- #
# Version
# --------------------------------------------------------------------- #
try:  # When installed (pip/poetry)
    __version__: str = _meta.version("codec-config")
except _meta.PackageNotFoundError:  # Editable checkout / source tree
    __version__ = "0.1.0"

# --------------------------------------------------------------------- #
# Logging
# --------------------------------------------------------------------- #
_logging.getLogger(__name__).addHandler(_logging.NullHandler()) # *never* touch the root logger.

# --------------------------------------------------------------------- #
# Public re-exports
# --------------------------------------------------------------------- #
from .codecs import Codec, IntRangeCodec, ModelCodec  # noqa: E402
from .errors import TRANSPORT_ERRORS, ConfigError, RangeError  # noqa: E402
from .lifecycle import DISABLED, initialize_config  # noqa: E402
from .results import DataResult  # noqa: E402
from .settings import CodecConfigSettings, resolve_config_path  # noqa: E402
from .transcoder import decode_config, encode_config  # noqa: E402
from .versioning import (  # noqa: E402
    VERSION_KEY,
    ConfigType,
    VersionedCodec,
    VersionedConfig,
    build_codec,
)

__all__ = [
    "Codec",
    "CodecConfigSettings",
    "ConfigError",
    "ConfigType",
    "DISABLED",
    "DataResult",
    "IntRangeCodec",
    "ModelCodec",
    "RangeError",
    "TRANSPORT_ERRORS",
    "VERSION_KEY",
    "VersionedCodec",
    "VersionedConfig",
    "build_codec",
    "decode_config",
    "encode_config",
    "initialize_config",
    "resolve_config_path",
]
