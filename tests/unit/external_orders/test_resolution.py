"""Unit tests for concurrent product-code resolution."""

from __future__ import annotations

import threading
import time
from concurrent.futures import ThreadPoolExecutor
from types import SimpleNamespace
from uuid import uuid4

import pytest
from structlog.testing import capture_logs

from modules.external_orders.resolution import (
    ResolutionStatus,
    resolve_product_code,
    resolve_product_codes,
)

pytestmark = [pytest.mark.unit, pytest.mark.asyncio]


async def test_found_code_is_resolved():
    code = uuid4()
    result = await resolve_product_code(
        code,
        lambda c: SimpleNamespace(id=3, name="Hinge"),
        timeout=1.0,
        thread_sensitive=False,
    )
    assert result.status is ResolutionStatus.RESOLVED
    assert result.product_id == 3
    assert result.product_name == "Hinge"
    assert result.resolved
    assert not result.missing


async def test_unknown_code_is_not_found():
    result = await resolve_product_code(
        uuid4(), lambda c: None, timeout=1.0, thread_sensitive=False
    )
    assert result.status is ResolutionStatus.NOT_FOUND
    assert result.missing
    assert result.product_id is None


async def test_slow_lookup_times_out():
    def slow(code):
        time.sleep(0.5)
        return SimpleNamespace(id=1, name="late")

    with capture_logs() as logs:
        result = await resolve_product_code(
            uuid4(), slow, timeout=0.05, thread_sensitive=False
        )

    assert result.status is ResolutionStatus.TIMED_OUT
    assert result.missing
    assert any(e["event"] == "product_code.lookup_timed_out" for e in logs)


async def test_lookup_error_is_recorded_not_raised():
    def broken(code):
        raise RuntimeError("connection reset")

    result = await resolve_product_code(
        uuid4(), broken, timeout=1.0, thread_sensitive=False
    )
    assert result.status is ResolutionStatus.FAILED
    assert isinstance(result.error, RuntimeError)
    assert not result.missing


async def test_distinct_codes_resolved_once_each_in_input_order():
    a, b, c = uuid4(), uuid4(), uuid4()
    calls = []

    def lookup(code):
        calls.append(code)
        return None if code == b else SimpleNamespace(id=hash(code) % 100, name="x")

    resolutions = await resolve_product_codes(
        [a, b, a, c, b], lookup, timeout=1.0, thread_sensitive=False
    )

    assert list(resolutions) == [a, b, c]
    assert sorted(calls, key=str) == sorted([a, b, c], key=str)
    assert resolutions[a].resolved
    assert resolutions[b].status is ResolutionStatus.NOT_FOUND


async def test_one_slow_lookup_does_not_block_others():
    fast, slow = uuid4(), uuid4()

    def lookup(code):
        if code == slow:
            time.sleep(0.5)
        return SimpleNamespace(id=1, name="fast")

    resolutions = await resolve_product_codes(
        [slow, fast], lookup, timeout=0.1, thread_sensitive=False
    )
    assert resolutions[fast].resolved
    assert resolutions[slow].status is ResolutionStatus.TIMED_OUT


async def test_executor_lookups_are_abandoned_at_timeout():
    fast, slow = uuid4(), uuid4()
    release = threading.Event()

    def lookup(code):
        if code == slow:
            release.wait(2.0)
        return SimpleNamespace(id=1, name="fast")

    pool = ThreadPoolExecutor(max_workers=2)
    started = time.monotonic()
    try:
        resolutions = await resolve_product_codes(
            [slow, fast], lookup, timeout=0.1, executor=pool
        )
        elapsed = time.monotonic() - started
    finally:
        release.set()
        pool.shutdown(wait=False)

    assert resolutions[fast].resolved
    assert resolutions[slow].status is ResolutionStatus.TIMED_OUT
    assert elapsed < 1.0


async def test_empty_input():
    assert await resolve_product_codes([], lambda c: None, timeout=1.0) == {}
