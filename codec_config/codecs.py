# =============================================================
#  codec_config/codecs.py
# =============================================================
"""Bidirectional mappings between typed values and plain data trees.

A *tree* is what ``json.loads`` / ``yaml.safe_load`` produce: nested dicts,
lists and primitives. A :class:`Codec` turns a tree into a value
(:meth:`Codec.parse`) and back (:meth:`Codec.encode`). Neither direction
raises for bad input; both return a :class:`~codec_config.results.DataResult`.

Pydantic does the heavy lifting:

* :class:`ModelCodec` wraps any ``BaseModel`` subclass.
* :class:`IntRangeCodec` validates a strict integer inside ``[low, high]``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Callable, Generic, Type, TypeVar

from pydantic import BaseModel, Field, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError
from typing_extensions import Annotated

from .errors import RangeError
from .results import DataResult

__all__ = ["Codec", "ModelCodec", "IntRangeCodec", "format_validation_error"]

T = TypeVar("T")
R = TypeVar("R")
M = TypeVar("M", bound=BaseModel)


def format_validation_error(exc: ValidationError) -> str:
    """One-line ``loc: msg`` summary of a pydantic error."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "<root>"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)


class Codec(ABC, Generic[T]):
    """Paired parse / encode strategy for one value type."""

    @abstractmethod
    def parse(self, tree: Any) -> DataResult[T]:
        ...

    @abstractmethod
    def encode(self, value: T) -> DataResult[Any]:
        ...

    def xmap(self, to: Callable[[T], R], from_: Callable[[R], T]) -> "Codec[R]":
        """Derive a codec for ``R`` through a pair of total conversions."""
        return _XMapCodec(self, to, from_)


class _XMapCodec(Codec[R]):
    def __init__(self, inner: Codec[Any], to: Callable[[Any], R], from_: Callable[[R], Any]):
        self._inner = inner
        self._to = to
        self._from = from_

    def parse(self, tree: Any) -> DataResult[R]:
        return self._inner.parse(tree).map(self._to)

    def encode(self, value: R) -> DataResult[Any]:
        return self._inner.encode(self._from(value))


class ModelCodec(Codec[M]):
    """Codec for a pydantic model; the tree must be a mapping."""

    def __init__(self, model_cls: Type[M]):
        self.model_cls = model_cls

    def parse(self, tree: Any) -> DataResult[M]:
        if not isinstance(tree, Mapping):
            return DataResult.error(f"Not a map: {tree!r}")
        try:
            return DataResult.success(self.model_cls.model_validate(dict(tree)))
        except ValidationError as exc:
            return DataResult.error(format_validation_error(exc))

    def encode(self, value: M) -> DataResult[Any]:
        if not isinstance(value, self.model_cls):
            return DataResult.error(
                f"Expected {self.model_cls.__name__}, got {type(value).__name__}"
            )
        try:
            return DataResult.success(value.model_dump(mode="json"))
        except PydanticSerializationError as exc:
            return DataResult.error(str(exc))

    def __repr__(self) -> str:
        return f"ModelCodec({self.model_cls.__name__})"


class IntRangeCodec(Codec[int]):
    """Strict integer in the closed range ``[low, high]``.

    ``bool``, ``float`` and numeric strings are rejected. Every failure is a
    :class:`~codec_config.errors.RangeError`.
    """

    def __init__(self, low: int, high: int):
        self.low = low
        self.high = high
        self._adapter = TypeAdapter(Annotated[int, Field(strict=True, ge=low, le=high)])

    def _check(self, value: Any) -> DataResult[int]:
        if isinstance(value, bool):
            return DataResult.error(self._type_message(value), RangeError)
        try:
            return DataResult.success(self._adapter.validate_python(value))
        except ValidationError as exc:
            kinds = {err["type"] for err in exc.errors()}
            if kinds & {"greater_than_equal", "less_than_equal"}:
                return DataResult.error(
                    f"Value {value!r} outside of range [{self.low}:{self.high}]",
                    RangeError,
                )
            return DataResult.error(self._type_message(value), RangeError)

    def _type_message(self, value: Any) -> str:
        return f"Not an integer: {value!r}; expected a value in [{self.low}:{self.high}]"

    def parse(self, tree: Any) -> DataResult[int]:
        return self._check(tree)

    def encode(self, value: int) -> DataResult[Any]:
        return self._check(value)
