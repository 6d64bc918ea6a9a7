from __future__ import annotations

from runner.types import StepResult


def percentile(values: list[float], p: float) -> float:
    """Compute the p-th percentile using linear interpolation."""
    if not values:
        return 0.0
    s = sorted(values)
    k = (len(s) - 1) * p
    f = int(k)
    c = min(f + 1, len(s) - 1)
    if f == c:
        return s[f]
    d0 = s[f] * (c - k)
    d1 = s[c] * (k - f)
    return d0 + d1


def summarize(results: list[StepResult], aborted: str | None = None) -> tuple[dict, int]:
    """Compute summary dict and an exit code from the recorded steps."""
    durations_ms = [r.elapsed_ms for r in results if r.status_code is not None]
    failures = [
        {
            "step": r.name,
            "request": f"{r.method} {r.path}",
            "expected": r.expected_status,
            "status_code": r.status_code,
            "problems": r.problems,
        }
        for r in results
        if not r.ok
    ]
    passed = len(results) - len(failures)

    avg_ms = (sum(durations_ms) / len(durations_ms)) if durations_ms else 0.0
    summary = {
        "component": "runner",
        "event": "summary",
        "steps": len(results),
        "passed": passed,
        "failed": len(failures),
        "timings": {
            "avg_ms": round(avg_ms, 2),
            "p95_ms": round(percentile(durations_ms, 0.95), 2),
            "max_ms": round(max(durations_ms), 2) if durations_ms else 0.0,
        },
        "failures": failures,
    }
    if aborted:
        summary["aborted"] = aborted
    exit_code = 0 if (not failures and not aborted and results) else 1
    return summary, exit_code
