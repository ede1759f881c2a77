"""Base classes for request and response models."""

from __future__ import annotations

import sys
from typing import Any

from pydantic import BaseModel, ConfigDict

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self


class ResponseModel(BaseModel):
    """Immutable model decoded from an API response. Unknown fields are ignored."""

    model_config = ConfigDict(frozen=True, extra="ignore", protected_namespaces=())


class RequestModel(BaseModel):
    """Immutable request payload.

    Unset optional fields are ``None`` and left out of the JSON body. Use
    :meth:`replace` (or the per-model ``with_*`` helpers) to derive a modified
    copy instead of mutating.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", protected_namespaces=())

    def replace(self, **changes: Any) -> Self:
        """Return a validated copy with ``changes`` applied."""
        return self.model_validate({**dict(self), **changes})

    def to_payload(self) -> dict[str, Any]:
        """The JSON body as a dict, unset fields omitted."""
        return self.model_dump(mode="json", exclude_none=True)
