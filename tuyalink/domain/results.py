from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from tuyalink.core.errors import TuyaError


@dataclass(frozen=True)
class ApiResult:
    """
    Outcome of one API call: either a decoded ``value`` or an ``error``.

    Callers that prefer exceptions use ``unwrap()``.
    """
    value: Any = None
    error: Optional[TuyaError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Any) -> "ApiResult":
        return cls(value=value)

    @classmethod
    def failure(cls, error: TuyaError) -> "ApiResult":
        return cls(error=error)

    def unwrap(self) -> Any:
        if self.error is not None:
            raise self.error
        return self.value
