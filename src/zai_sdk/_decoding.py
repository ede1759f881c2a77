"""JSON decoding into typed models."""

from __future__ import annotations

import json
from functools import lru_cache
from typing import Any, TypeVar, cast

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from zai_sdk.exceptions import SerializationError

T = TypeVar("T")


@lru_cache(maxsize=256)
def _adapter(cast_to: Any) -> TypeAdapter[Any]:
    return TypeAdapter(cast_to)


def decode_json(
    raw: bytes | str,
    cast_to: type[T],
    *,
    request_id: str | None = None,
) -> T:
    """Decode a JSON payload into ``cast_to``.

    Raises:
        SerializationError: If the payload is not valid JSON or does not fit
            the target type. The raw payload is kept on the error.
    """
    try:
        return cast(T, _adapter(cast_to).validate_json(raw))
    except PydanticValidationError as e:
        text = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else raw
        raise SerializationError(
            f"Failed to decode {getattr(cast_to, '__name__', cast_to)}: {e}",
            request_id=request_id,
            body=text,
        ) from e


def encode_json(body: Any) -> bytes:
    """Serialize a request body, omitting unset (None) model fields."""
    if isinstance(body, BaseModel):
        return body.model_dump_json(exclude_none=True).encode("utf-8")
    try:
        return json.dumps(body, ensure_ascii=False).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Failed to encode request body: {e}") from e
