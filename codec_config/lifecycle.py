# =============================================================
#  codec_config/lifecycle.py
# =============================================================
"""Read, migrate and (re)write one config file at application start-up.

:func:`initialize_config` is the only place where failures are swallowed:
every transport or codec error is handed to the ``log_error`` callback and a
usable config is always returned.

There is no file locking. Two concurrent calls for the same path can race
between the existence check and the exclusive create, or between the read
and the overwrite. Callers must serialize calls per path.
"""

from __future__ import annotations

import io
import logging
import os
from pathlib import Path
from typing import Callable, Optional, TypeVar

from pydantic import ValidationError

from .codecs import Codec, format_validation_error
from .errors import TRANSPORT_ERRORS, ConfigError
from .settings import resolve_config_path, resolve_file_format
from .transcoder import decode_config, encode_config
from .versioning import VersionedConfig

__all__ = ["DISABLED", "initialize_config"]

log = logging.getLogger(__name__)
C = TypeVar("C", bound=VersionedConfig)

DISABLED = -1
"""``latest_version`` value that turns off every automatic write."""


def initialize_config(
    path: str | os.PathLike,
    default: C,
    codec: Codec[VersionedConfig],
    *,
    latest_version: int = DISABLED,
    config_dir: str | os.PathLike | None = None,
    file_format: Optional[str] = None,
    log_info: Optional[Callable[[str], None]] = None,
    log_error: Optional[Callable[[str], None]] = None,
) -> C:
    """Load the config stored at ``path``, falling back to ``default``.

    * If the file exists it is decoded and upgraded to the latest variant.
      When ``latest_version`` is set, the decoded variant allows it and is
      older than ``latest_version``, the file is overwritten with the
      upgraded encoding.
    * If the file is missing and ``latest_version`` is set, ``default`` is
      written to a newly created file.
    * With ``latest_version=DISABLED`` the file is never written.

    Parameters
    ----------
    path : str | os.PathLike
        Config file name; relative names resolve against ``config_dir``
        (or :class:`~codec_config.settings.CodecConfigSettings.config_dir`).
    default : VersionedConfig
        Latest-variant value returned whenever nothing usable is on disk.
    codec : Codec
        Usually built by :func:`~codec_config.versioning.build_codec`.
    file_format : str | None
        ``json``, ``yaml`` or ``toml``; detected from the suffix when omitted.
    log_info, log_error : callable | None
        Receive one message string each; default to this module's logger.
    """
    log_info = log_info or log.info
    log_error = log_error or log.error

    try:
        config_path = resolve_config_path(path, config_dir)
        fmt = resolve_file_format(config_path, file_format)
        exists = config_path.is_file()
    except OSError as exc:
        log_error(f"IO exception while trying to read config: {exc}")
        return default
    except ValidationError as exc:
        log_error(f"Invalid codec_config settings: {format_validation_error(exc)}")
        return default
    latest_config = default

    if exists:
        try:
            with config_path.open("rb") as source:
                log_info("Reading config.")
                config = decode_config(source, codec, file_format=fmt)
            latest_config = config.upgrade_to_latest()
        except TRANSPORT_ERRORS as exc:
            log_error(f"IO exception while trying to read config: {exc}")
            return default
        except ConfigError as exc:
            log_error(str(exc))
            return default
        except ValidationError as exc:
            log_error(f"Error upgrading config: {format_validation_error(exc)}")
            return default

        if (
            latest_version != DISABLED
            and config.auto_update_allowed()
            and config.schema_version < latest_version
        ):
            log_info("Writing updated config.")
            _write_config(
                config_path, "w", codec, latest_config, fmt, log_error, what="updated config"
            )
    elif latest_version != DISABLED:
        log_info("Writing default config.")
        _write_config(config_path, "x", codec, default, fmt, log_error, what="config")

    return latest_config


def _write_config(
    config_path: Path,
    mode: str,
    codec: Codec[VersionedConfig],
    value: VersionedConfig,
    file_format: str,
    log_error: Callable[[str], None],
    *,
    what: str,
) -> bool:
    # Render first so an encode failure never leaves a truncated file behind.
    buffer = io.StringIO()
    try:
        encode_config(buffer, codec, value, file_format=file_format)
    except ConfigError as exc:
        log_error(str(exc))
        return False

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with config_path.open(mode, encoding="utf-8") as output:
            output.write(buffer.getvalue())
    except OSError as exc:
        log_error(f"IO exception while trying to write {what}: {exc}")
        return False
    log.debug("Wrote %s to %s", what, config_path)
    return True
