# =============================================================
#  codec_config/transcoder.py
# =============================================================
"""Stream-level decode / encode of a whole config.

Both functions propagate their failures. Parser and I/O errors come out
as-is (see :data:`~codec_config.errors.TRANSPORT_ERRORS`); anything the
codec rejects is raised as :class:`~codec_config.errors.ConfigError`.
"""

from __future__ import annotations

import logging
from typing import IO, Any, TypeVar

from . import formats
from .codecs import Codec
from .errors import ConfigError

__all__ = ["decode_config", "encode_config"]

log = logging.getLogger(__name__)
T = TypeVar("T")


def decode_config(source: IO[Any], codec: Codec[T], *, file_format: str = "json") -> T:
    """Read ``source`` to the end and decode it with ``codec``.

    ``source`` may be a text or binary stream; bytes are read as UTF-8.
    """
    raw = source.read()
    text = raw.decode("utf-8") if isinstance(raw, bytes) else raw
    tree = formats.loads(text, file_format)
    return codec.parse(tree).get_or_raise("Error decoding config")


def encode_config(sink: IO[str], codec: Codec[T], value: T, *, file_format: str = "json") -> None:
    """Encode ``value`` with ``codec`` and append the pretty text to ``sink``."""
    tree = codec.encode(value).get_or_raise("Error encoding config")
    try:
        text = formats.dumps(tree, file_format)
    except TypeError as exc:  # e.g. TOML has no null
        raise ConfigError(f"Error encoding config: {exc}") from exc
    log.debug("Encoded %d characters of %s", len(text), file_format)
    sink.write(text)
