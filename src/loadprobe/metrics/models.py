from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Outcome:
    elapsed_sec: float
    status_code: int | None = None
    error: str | None = None

    def __post_init__(self) -> None:
        if self.status_code is None and self.error is None:
            msg = "outcome needs a status code or an error"
            raise ValueError(msg)

    @property
    def failed(self) -> bool:
        if self.error is not None:
            return True
        return self.status_code is not None and self.status_code >= 400


@dataclass(slots=True)
class AggregateResult:
    """Counts, histograms and latencies accumulated over one run.

    Owned by a single aggregation loop until :meth:`freeze` is called; after
    that it is read-only.
    """

    total: int = 0
    succeeded: int = 0
    failed: int = 0
    status_codes: dict[int, int] = field(default_factory=dict)
    errors: dict[str, int] = field(default_factory=dict)
    latencies: list[float] = field(default_factory=list)
    duration_sec: float = 0.0
    frozen: bool = False

    def record(self, outcome: Outcome) -> None:
        if self.frozen:
            msg = "cannot record into a frozen result"
            raise RuntimeError(msg)
        self.total += 1
        if outcome.error is not None:
            self.failed += 1
            self.errors[outcome.error] = self.errors.get(outcome.error, 0) + 1
        elif outcome.status_code is not None:
            code = outcome.status_code
            if code >= 400:
                self.failed += 1
            else:
                self.succeeded += 1
            self.status_codes[code] = self.status_codes.get(code, 0) + 1
        self.latencies.append(outcome.elapsed_sec)

    def freeze(self, duration_sec: float) -> None:
        self.duration_sec = duration_sec
        self.frozen = True


@dataclass(frozen=True, slots=True)
class Stats:
    average: float = 0.0
    p50: float = 0.0
    p90: float = 0.0
    p99: float = 0.0
    rps: float = 0.0
