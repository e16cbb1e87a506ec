# =============================================================
#  codec_config/versioning.py
# =============================================================
"""Version-tagged configuration models and the dispatching codec.

Every schema variant of one configuration is a :class:`VersionedConfig`
subclass. A :class:`ConfigType` binds a variant to its integer version and
the codec for its shape. :func:`build_codec` combines all of them into one
codec whose trees carry a ``version`` key:

```python
class GreetingV1(VersionedConfig):
    message: str = "hello"

    def config_type(self) -> ConfigType:
        return GREETING_V1

    def upgrade_to_latest(self) -> "GreetingV2":
        return GreetingV2(greeting=self.message)

    def auto_update_allowed(self) -> bool:
        return True

GREETING_V1 = ConfigType.of_model(1, GreetingV1)
...
CODEC = build_codec(2, {1: GREETING_V1, 2: GREETING_V2})
```
"""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Dict, Type, Union

from pydantic import BaseModel, ConfigDict

from .codecs import Codec, IntRangeCodec, ModelCodec
from .errors import RangeError
from .results import DataResult

__all__ = [
    "VERSION_KEY",
    "ConfigType",
    "VersionedConfig",
    "VersionedCodec",
    "build_codec",
]

VERSION_KEY = "version"


@dataclass(frozen=True)
class ConfigType:
    """Registration of one schema variant: its version and payload codec."""

    version: int
    codec: Codec[Any]

    def __post_init__(self):
        if isinstance(self.version, bool) or not isinstance(self.version, int) or self.version < 1:
            raise ValueError(f"Config version must be an integer >= 1, got {self.version!r}")

    @classmethod
    def of_model(cls, version: int, model_cls: Type[BaseModel]) -> "ConfigType":
        return cls(version, ModelCodec(model_cls))


class VersionedConfig(BaseModel):
    """Base class for every schema variant.

    Instances are immutable; :meth:`upgrade_to_latest` returns a new object
    (the latest variant returns itself).
    """

    model_config = ConfigDict(frozen=True)

    @abstractmethod
    def config_type(self) -> ConfigType:
        ...

    @property
    def schema_version(self) -> int:
        return self.config_type().version

    @abstractmethod
    def upgrade_to_latest(self) -> "VersionedConfig":
        ...

    @abstractmethod
    def auto_update_allowed(self) -> bool:
        ...


Resolver = Union[Callable[[int], ConfigType], Mapping]


class VersionedCodec(Codec[VersionedConfig]):
    """Dispatches on the ``version`` key of a mapping tree."""

    def __init__(self, latest_version: int, types: Dict[int, ConfigType]):
        self.latest_version = latest_version
        self._types = IntRangeCodec(1, latest_version).xmap(
            types.__getitem__, lambda config_type: config_type.version
        )

    def parse(self, tree: Any) -> DataResult[VersionedConfig]:
        if not isinstance(tree, Mapping):
            return DataResult.error(f"Not a map: {tree!r}")
        if VERSION_KEY not in tree:
            return DataResult.error(
                f"Missing '{VERSION_KEY}' field; expected an integer in [1:{self.latest_version}]",
                RangeError,
            )
        payload = {k: v for k, v in tree.items() if k != VERSION_KEY}
        return self._types.parse(tree[VERSION_KEY]).flat_map(
            lambda config_type: config_type.codec.parse(payload)
        )

    def encode(self, value: VersionedConfig) -> DataResult[Any]:
        if not isinstance(value, VersionedConfig):
            return DataResult.error(f"Not a versioned config: {type(value).__name__}")
        config_type = value.config_type()
        return self._types.encode(config_type).flat_map(
            lambda version: config_type.codec.encode(value).flat_map(
                lambda payload: _attach_version(version, payload)
            )
        )

    def __repr__(self) -> str:
        return f"VersionedCodec(latest_version={self.latest_version})"


def _attach_version(version: int, payload: Any) -> DataResult[Any]:
    if not isinstance(payload, Mapping):
        return DataResult.error(f"Variant encoded to a non-map value: {payload!r}")
    if VERSION_KEY in payload:
        return DataResult.error(f"Variant field clashes with the '{VERSION_KEY}' key")
    return DataResult.success({VERSION_KEY: version, **payload})


def build_codec(latest_version: int, resolve: Resolver) -> VersionedCodec:
    """Build the version-dispatching codec.

    ``resolve`` maps each version in ``[1, latest_version]`` to its
    :class:`ConfigType`, either as a callable or as a mapping. All versions
    are resolved up front; a gap or a mismatched registration raises
    :class:`ValueError` here rather than at decode time.
    """
    if isinstance(latest_version, bool) or not isinstance(latest_version, int) or latest_version < 1:
        raise ValueError(f"latest_version must be an integer >= 1, got {latest_version!r}")

    lookup = resolve.__getitem__ if isinstance(resolve, Mapping) else resolve
    types: Dict[int, ConfigType] = {}
    for version in range(1, latest_version + 1):
        try:
            config_type = lookup(version)
        except LookupError as exc:
            raise ValueError(f"No config type registered for version {version}") from exc
        if not isinstance(config_type, ConfigType):
            raise ValueError(f"Version {version} resolved to {config_type!r}, not a ConfigType")
        if config_type.version != version:
            raise ValueError(
                f"Version {version} resolved to a config type for version {config_type.version}"
            )
        types[version] = config_type
    return VersionedCodec(latest_version, types)
