"""Structured operation results

Every public engine operation returns a Result instead of raising:

    success -> {'value': <value>}
    failure -> {'error': {'code': <code>, 'message': <message>}}

Example:
    >>> Result.success('http://short.ly/1x9f3k').to_dict()
    {'value': 'http://short.ly/1x9f3k'}
    >>> Result.failure('NOT_FOUND', 'http://short.ly/zzz not found').to_dict()
    {'error': {'code': 'NOT_FOUND', 'message': 'http://short.ly/zzz not found'}}
    >>> Result.success().to_dict()
    {}
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ErrorInfo:
    code: str
    message: str


@dataclass(frozen=True)
class Result:
    value: Any = None
    error: ErrorInfo | None = None

    @classmethod
    def success(cls, value: Any = None) -> 'Result':
        return cls(value=value)

    @classmethod
    def failure(cls, code: str, message: str) -> 'Result':
        return cls(error=ErrorInfo(code=code, message=message))

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict[str, Any]:
        if self.error is not None:
            return {'error': {'code': self.error.code, 'message': self.error.message}}
        if self.value is None:
            return {}
        return {'value': self.value}
