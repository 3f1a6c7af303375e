"""
Result decoding.

One decode function per expected result shape: a single object, a list of
objects, or nothing. Shape and validation problems become
InvalidResponseError.
"""

from __future__ import annotations
from typing import Any, Callable, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..runtime.errors import InvalidResponseError


M = TypeVar("M", bound=BaseModel)

Decoder = Callable[[Any], Any]


def _validate(model: Type[M], value: Any) -> M:
    try:
        return model.model_validate(value)
    except ValidationError as e:
        raise InvalidResponseError(f"cannot decode {model.__name__}: {e}", cause=e)


def decode_object(result: Any, model: Type[M]) -> Optional[M]:
    """Decode an object result; None when the result is absent."""
    if result is None:
        return None
    if not isinstance(result, dict):
        raise InvalidResponseError(f"expect object but got something else: {result!r}")
    return _validate(model, result)


def decode_list(result: Any, model: Type[M]) -> List[M]:
    """Decode an array result; empty when the result is absent."""
    if result is None:
        return []
    if not isinstance(result, list):
        raise InvalidResponseError(f"expect array but got something else: {result!r}")
    return [_validate(model, item) for item in result]


def object_of(model: Type[M]) -> Decoder:
    return lambda result: decode_object(result, model)


def list_of(model: Type[M]) -> Decoder:
    return lambda result: decode_list(result, model)
