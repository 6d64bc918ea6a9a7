#!/usr/bin/env python3
"""End-to-end smoke run against a live Todo API.

Steps:
- wait for server health
- register a throwaway user, read it back, log in again
- walk the todo lifecycle (create, list, fetch, complete, reopen, delete)
- log out and confirm the token stops working
- emit a compact JSON summary and exit code
"""
from __future__ import annotations

import asyncio
import sys
from uuid import uuid4

import httpx

from runner.cli import parse_args
from runner.client import AUTH_HEADER, call, wait_for_health
from runner.types import SmokeError, StepFailed, StepResult
from runner.utils import summarize
from todo_api.logging_conf import get_logger, setup_logging

setup_logging()
logger = get_logger("runner")


def _require(result: StepResult) -> StepResult:
    if not result.ok:
        raise StepFailed(result)
    return result


def _check(result: StepResult, condition: bool, problem: str) -> None:
    if not condition:
        result.problems.append(problem)


async def _user_flow(client: httpx.AsyncClient, password: str, out: list[StepResult]) -> str:
    """Exercise the user endpoints; return a live token for later steps."""
    email = f"smoke-{uuid4().hex[:12]}@example.com"
    creds = {"email": email, "password": password}

    created = await call(client, "user.create", "POST", "/users", expect=200, json=creds)
    out.append(created)
    _check(created, AUTH_HEADER in created.headers, "x-auth header missing")
    _check(created, "password" not in (created.body or {}), "password leaked")
    token = _require(created).headers[AUTH_HEADER]

    me = await call(client, "user.me", "GET", "/users/me", expect=200, token=token)
    out.append(me)
    _check(me, (me.body or {}).get("email") == email, "email mismatch")

    anon = await call(client, "user.me_anonymous", "GET", "/users/me", expect=401)
    out.append(anon)
    _check(anon, anon.body == {}, "401 body not empty")

    dup = await call(client, "user.create_duplicate", "POST", "/users", expect=400, json=creds)
    out.append(dup)

    login = await call(client, "user.login", "POST", "/users/login", expect=200, json=creds)
    out.append(login)
    return _require(login).headers.get(AUTH_HEADER, token)


async def _todo_flow(client: httpx.AsyncClient, out: list[StepResult]) -> None:
    created = await call(
        client, "todo.create", "POST", "/todos", expect=200, json={"text": "smoke todo"}
    )
    out.append(created)
    todo_id = _require(created).body["_id"]

    blank = await call(client, "todo.create_blank", "POST", "/todos", expect=400, json={"text": "  "})
    out.append(blank)

    listed = await call(client, "todo.list", "GET", "/todos", expect=200)
    out.append(listed)
    _check(listed, isinstance((listed.body or {}).get("todos"), list), "todos not a list")

    fetched = await call(client, "todo.get", "GET", f"/todos/{todo_id}", expect=200)
    out.append(fetched)

    done = await call(
        client, "todo.complete", "PATCH", f"/todos/{todo_id}", expect=200, json={"completed": True}
    )
    out.append(done)
    _check(
        done,
        isinstance(((done.body or {}).get("todo") or {}).get("completedAt"), int),
        "completedAt not set",
    )

    reopened = await call(
        client, "todo.reopen", "PATCH", f"/todos/{todo_id}", expect=200, json={"completed": False}
    )
    out.append(reopened)
    _check(
        reopened,
        ((reopened.body or {}).get("todo") or {}).get("completedAt") is None,
        "completedAt not cleared",
    )

    out.append(await call(client, "todo.delete", "DELETE", f"/todos/{todo_id}", expect=200))
    out.append(await call(client, "todo.get_deleted", "GET", f"/todos/{todo_id}", expect=404))
    out.append(await call(client, "todo.get_malformed", "GET", "/todos/1234", expect=404))


async def run_smoke(
    *, base_url: str, password: str, timeout_s: float = 10.0, health_timeout_s: float = 20.0
) -> int:
    await wait_for_health(base_url, timeout_s=health_timeout_s)
    results: list[StepResult] = []
    aborted: str | None = None
    async with httpx.AsyncClient(base_url=base_url, timeout=timeout_s) as client:
        try:
            token = await _user_flow(client, password, results)
            await _todo_flow(client, results)
            out = await call(client, "user.logout", "DELETE", "/users/me/token", expect=200, token=token)
            results.append(out)
            results.append(
                await call(client, "user.me_revoked", "GET", "/users/me", expect=401, token=token)
            )
        except StepFailed as e:
            aborted = str(e)
            logger.warning("runner.aborted", extra={"event": "runner_aborted", "reason": aborted})
    summary, exit_code = summarize(results, aborted=aborted)
    logger.info("runner.summary", extra=summary)
    return exit_code


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    try:
        code = asyncio.run(
            run_smoke(
                base_url=args.base_url,
                password=args.password,
                timeout_s=args.timeout,
                health_timeout_s=args.health_timeout,
            )
        )
    except SmokeError as e:
        logger.error("runner.failed", extra={"event": "runner_failed", "error": str(e)})
        code = 1
    raise SystemExit(code)


if __name__ == "__main__":
    main()
