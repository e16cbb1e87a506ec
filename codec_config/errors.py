# =============================================================
#  codec_config/errors.py
# =============================================================
"""Error kinds raised by the codec and transcoding layers.

Two families exist:

* **transport** failures - the raw stream could not be read, written or
  parsed as the text format. These are the library's own exceptions
  (``OSError``, ``json.JSONDecodeError`` …) and propagate unchanged.
* :class:`ConfigError` - the text parsed fine but the codec rejected it.
"""

from __future__ import annotations

import json

import tomli
import yaml

__all__ = ["ConfigError", "RangeError", "TRANSPORT_ERRORS"]


class ConfigError(Exception):
    """Semantic decode / encode failure reported by a codec."""


class RangeError(ConfigError):
    """The ``version`` tag is missing or outside ``[1, latest]``."""


# UnicodeDecodeError and JSONDecodeError are ValueErrors, but only these two
# are raised by the parsers; a bare ValueError is not a transport failure.
# RecursionError comes from the recursive parsers on deeply nested input.
TRANSPORT_ERRORS: tuple[type[BaseException], ...] = (
    OSError,
    UnicodeDecodeError,
    json.JSONDecodeError,
    yaml.YAMLError,
    tomli.TOMLDecodeError,
    RecursionError,
)
