from __future__ import annotations

import asyncio
import time
from typing import Any

import httpx

from todo_api.logging_conf import get_logger
from runner.types import SmokeError, StepResult

logger = get_logger("runner.client")

AUTH_HEADER = "x-auth"


async def wait_for_health(base_url: str, timeout_s: float = 20.0) -> None:
    """Ping /health until it returns ok or raise after a timeout."""
    deadline = time.monotonic() + timeout_s
    async with httpx.AsyncClient(base_url=base_url, timeout=5.0) as client:
        while time.monotonic() < deadline:
            try:
                r = await client.get("/health")
                if r.status_code == 200 and r.json().get("ok") is True:
                    logger.info("health.ok", extra={"event": "health_ok"})
                    return
            except httpx.HTTPError as e:
                logger.debug("health.wait", extra={"event": "health_wait", "error": str(e)})
            await asyncio.sleep(0.25)
    raise SmokeError("Health check did not pass within timeout")


async def call(
    client: httpx.AsyncClient,
    name: str,
    method: str,
    path: str,
    *,
    expect: int,
    json: Any = None,
    token: str | None = None,
) -> StepResult:
    """Perform one request and record its status, latency and body.

    Transport errors become a failed step rather than an exception so the
    run can still produce a summary.
    """
    headers = {AUTH_HEADER: token} if token else {}
    start = time.perf_counter()
    try:
        r = await client.request(method, path, json=json, headers=headers)
    except httpx.HTTPError as e:
        elapsed_ms = (time.perf_counter() - start) * 1000.0
        logger.warning(
            "step.transport_error",
            extra={"event": "step_transport_error", "step": name, "error": str(e)},
        )
        return StepResult(
            name=name,
            method=method,
            path=path,
            expected_status=expect,
            status_code=None,
            elapsed_ms=elapsed_ms,
            problems=[f"transport error: {e}"],
        )
    elapsed_ms = (time.perf_counter() - start) * 1000.0

    try:
        body = r.json() if r.content else None
    except ValueError:
        body = r.text
    result = StepResult(
        name=name,
        method=method,
        path=path,
        expected_status=expect,
        status_code=r.status_code,
        elapsed_ms=elapsed_ms,
        body=body,
        headers=dict(r.headers),
    )
    logger.info(
        "step.done",
        extra={
            "event": "step_done",
            "step": name,
            "status_code": r.status_code,
            "expected": expect,
            "elapsed_ms": round(elapsed_ms, 2),
        },
    )
    return result
