from __future__ import annotations

import argparse
import importlib
import json
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from . import formats
from .codecs import format_validation_error
from .errors import TRANSPORT_ERRORS, ConfigError
from .lifecycle import DISABLED, initialize_config
from .settings import resolve_file_format
from .transcoder import decode_config


def _import_object(ref: str) -> Any:
    """Resolve ``package.module:attr``."""
    module_name, sep, attr = ref.partition(":")
    if not sep or not attr:
        raise argparse.ArgumentTypeError(f"expected MODULE:ATTR, got '{ref}'")
    try:
        obj: Any = importlib.import_module(module_name)
        for part in attr.split("."):
            obj = getattr(obj, part)
    except (ImportError, AttributeError) as exc:
        raise argparse.ArgumentTypeError(f"cannot import '{ref}': {exc}") from exc
    return obj


def _cmd_show(args: argparse.Namespace) -> int:
    path = Path(args.file)
    data = formats.load_file(path, file_format=resolve_file_format(path, args.format))
    print(json.dumps(data, indent=4, ensure_ascii=False))
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    path = Path(args.file)
    codec = args.codec
    try:
        fmt = resolve_file_format(path, args.format)
        with path.open("rb") as source:
            config = decode_config(source, codec, file_format=fmt)
    except (ConfigError, *TRANSPORT_ERRORS) as exc:
        print(f"{path}: {exc}", file=sys.stderr)
        return 1
    except ValidationError as exc:
        print(f"Invalid codec_config settings: {format_validation_error(exc)}", file=sys.stderr)
        return 1

    latest = getattr(codec, "latest_version", None)
    status = "outdated" if latest is not None and config.schema_version < latest else "up to date"
    print(f"{path}: version {config.schema_version} ({status})")
    return 0


def _cmd_init(args: argparse.Namespace) -> int:
    if args.no_write:
        latest = DISABLED
    elif args.latest is not None:
        latest = args.latest
    else:
        latest = getattr(args.codec, "latest_version", DISABLED)

    errors: list[str] = []

    def _error(message: str) -> None:
        errors.append(message)
        print(message, file=sys.stderr)

    config = initialize_config(
        args.file,
        args.default,
        args.codec,
        latest_version=latest,
        config_dir=args.config_dir,
        file_format=args.format,
        log_info=lambda message: print(message, file=sys.stderr),
        log_error=_error,
    )
    print(json.dumps(config.model_dump(mode="json"), indent=4, ensure_ascii=False))
    return 1 if errors else 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Versioned config file tool")
    sub = parser.add_subparsers(dest="cmd", required=True)

    def _add_format(p: argparse.ArgumentParser) -> None:
        p.add_argument("--format", choices=formats.FORMATS, default=None)

    p_show = sub.add_parser("show", help="Print a config file as JSON")
    p_show.add_argument("file")
    _add_format(p_show)
    p_show.set_defaults(func=_cmd_show)

    p_check = sub.add_parser("check", help="Decode a config file and report its version")
    p_check.add_argument("file")
    p_check.add_argument("--codec", required=True, type=_import_object, help="MODULE:ATTR")
    _add_format(p_check)
    p_check.set_defaults(func=_cmd_check)

    p_init = sub.add_parser("init", help="Load, migrate or create a config file")
    p_init.add_argument("file")
    p_init.add_argument("--codec", required=True, type=_import_object, help="MODULE:ATTR")
    p_init.add_argument("--default", required=True, type=_import_object, help="MODULE:ATTR")
    p_init.add_argument("--config-dir", default=None)
    group = p_init.add_mutually_exclusive_group()
    group.add_argument("--latest", type=int, default=None)
    group.add_argument("--no-write", action="store_true")
    _add_format(p_init)
    p_init.set_defaults(func=_cmd_init)

    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":  # pragma: no cover - manual use
    raise SystemExit(main())
