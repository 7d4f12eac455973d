from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ConfigError(ValueError):
    """Raised when a run configuration cannot be used."""


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


ALLOWED_METHODS = frozenset(method.value for method in HttpMethod)


@dataclass(frozen=True, slots=True)
class RunConfig:
    url: str
    method: str = HttpMethod.GET.value
    concurrency: int = 10
    duration_sec: float = 10.0
    timeout_sec: float = 10.0

    def validate(self) -> None:
        if not self.url:
            msg = "url is required"
            raise ConfigError(msg)
        if self.method not in ALLOWED_METHODS:
            msg = f"unsupported HTTP method {self.method!r}"
            raise ConfigError(msg)
        if self.concurrency <= 0:
            msg = f"concurrency must be positive, got {self.concurrency}"
            raise ConfigError(msg)
        if self.duration_sec <= 0:
            msg = f"duration must be positive, got {self.duration_sec}s"
            raise ConfigError(msg)
        if self.timeout_sec <= 0:
            msg = f"timeout must be positive, got {self.timeout_sec}s"
            raise ConfigError(msg)
