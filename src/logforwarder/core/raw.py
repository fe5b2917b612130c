"""
Raw event variants.

Event Hub payloads are arbitrary JSON values. ``classify`` tags each value
as one of four variants so the pipeline can keep structured objects and
drop everything else by matching on the variant instead of probing types.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class RawObject:
    fields: dict[str, Any]


@dataclass(frozen=True)
class RawArray:
    items: list[Any]


@dataclass(frozen=True)
class RawScalar:
    value: str | int | float | bool


@dataclass(frozen=True)
class RawNull:
    pass


RawEvent = Union[RawObject, RawArray, RawScalar, RawNull]


def classify(value: Any) -> RawEvent:
    """Tag a decoded JSON value with its variant.

    Anything that is not a JSON container, string, number or boolean
    (e.g. ``None`` from an undecodable body) is treated as null.
    """
    match value:
        case dict():
            return RawObject(value)
        case list() | tuple():
            return RawArray(list(value))
        case bool() | int() | float() | str():
            return RawScalar(value)
        case _:
            return RawNull()
