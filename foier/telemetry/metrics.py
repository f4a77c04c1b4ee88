from __future__ import annotations

import threading
import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Iterable, Tuple


def _percentile(sorted_values: List[float], p: float) -> float:
    if not sorted_values:
        return float("nan")
    k = (len(sorted_values) - 1) * (p / 100.0)
    f = math.floor(k)
    c = math.ceil(k)
    if f == c:
        return sorted_values[int(k)]
    d0 = sorted_values[f] * (c - k)
    d1 = sorted_values[c] * (k - f)
    return d0 + d1


def pct_summary(values: Iterable[float]) -> Dict[str, float]:
    vals = sorted(v for v in values if v is not None)
    if not vals:
        return {"count": 0, "min": float("nan"), "p50": float("nan"),
                "p95": float("nan"), "max": float("nan")}
    return {
        "count": len(vals),
        "min": vals[0],
        "p50": _percentile(vals, 50),
        "p95": _percentile(vals, 95),
        "max": vals[-1],
    }


@dataclass
class Metrics:
    lock: threading.Lock = field(default_factory=threading.Lock)

    targets_total: int = 0
    targets_saved: int = 0
    fetch_failed: int = 0
    create_failed: int = 0
    write_failed: int = 0
    unexpected_failed: int = 0

    bytes_written: int = 0

    # seconds from request to file closed, successful targets only
    fetch_durations: List[float] = field(default_factory=list)

    # error classification
    errors_by_type: Counter[str] = field(default_factory=Counter)

    def inc(self, attr: str, value: int = 1) -> None:
        with self.lock:
            setattr(self, attr, getattr(self, attr) + value)

    def add_bytes(self, n: int) -> None:
        with self.lock:
            self.bytes_written += n

    def observe_fetch(self, duration: float) -> None:
        with self.lock:
            self.fetch_durations.append(duration)

    def record_error(self, exc: BaseException) -> None:
        with self.lock:
            self.errors_by_type[type(exc).__name__] += 1

    @property
    def failed(self) -> int:
        return (self.fetch_failed + self.create_failed + self.write_failed
                + self.unexpected_failed)

    def summary(self) -> Tuple[str, Dict]:
        with self.lock:
            fetch_stats = pct_summary(self.fetch_durations)
            res = {
                "targets_total": self.targets_total,
                "targets_saved": self.targets_saved,
                "fetch_failed": self.fetch_failed,
                "create_failed": self.create_failed,
                "write_failed": self.write_failed,
                "unexpected_failed": self.unexpected_failed,
                "bytes_written": self.bytes_written,
                "fetch_seconds": fetch_stats,
                "errors_by_type": dict(self.errors_by_type),
            }

        lines = []
        lines.append("===== RUN SUMMARY =====")
        lines.append(f"Targets    : total={res['targets_total']}  saved={res['targets_saved']}  "
                     f"fetch_fail={res['fetch_failed']}  create_fail={res['create_failed']}  "
                     f"write_fail={res['write_failed']}  unexpected={res['unexpected_failed']}")
        lines.append(
            f"Written    : {res['bytes_written'] / (1024*1024):.2f} MiB")
        if fetch_stats["count"]:
            lines.append(
                f"Fetch secs : count={fetch_stats['count']}  "
                f"min={fetch_stats['min']:.4f}  p50={fetch_stats['p50']:.4f}  "
                f"p95={fetch_stats['p95']:.4f}  max={fetch_stats['max']:.4f}"
            )
        if res["errors_by_type"]:
            lines.append("")
            lines.append("Errors by type:")
            for k, v in sorted(res["errors_by_type"].items(), key=lambda kv: kv[1], reverse=True):
                lines.append(f"  {k}: {v}")

        return "\n".join(lines), res
