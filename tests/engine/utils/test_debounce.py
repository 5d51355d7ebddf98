# tests/engine/utils/test_debounce.py
import asyncio
import pytest

from tokenscope.engine.utils.debounce import DebounceGate

# 标记所有测试为异步
pytestmark = pytest.mark.asyncio

DELAY = 0.1


async def test_rapid_pushes_settle_once_with_last_value():
    settled = []
    gate = DebounceGate(DELAY, settled.append)

    for value in ["h", "he", "hel", "hell", "hello"]:
        gate.push(value)
        await asyncio.sleep(DELAY / 10)

    assert settled == []
    assert gate.pending is True

    await asyncio.sleep(DELAY * 3)
    assert settled == ["hello"]
    assert gate.pending is False

async def test_separate_quiet_windows_settle_separately():
    settled = []
    gate = DebounceGate(DELAY, settled.append)

    gate.push("a")
    await asyncio.sleep(DELAY * 3)
    gate.push("b")
    await asyncio.sleep(DELAY * 3)

    assert settled == ["a", "b"]

async def test_close_cancels_pending_timer():
    settled = []
    gate = DebounceGate(DELAY, settled.append)

    gate.push("never")
    gate.close()
    await asyncio.sleep(DELAY * 3)

    assert settled == []
    assert gate.pending is False
    assert gate.closed is True

async def test_push_after_close_is_rejected():
    gate = DebounceGate(DELAY, lambda v: None)
    gate.close()
    with pytest.raises(RuntimeError):
        gate.push("x")

async def test_cancel_drops_pending_emission():
    settled = []
    gate = DebounceGate(DELAY, settled.append)

    gate.push("x")
    gate.cancel()
    await asyncio.sleep(DELAY * 3)
    assert settled == []

    # cancel 之后 gate 仍然可用
    gate.push("y")
    await asyncio.sleep(DELAY * 3)
    assert settled == ["y"]

async def test_callback_error_does_not_escape():
    calls = []

    def explode(value):
        calls.append(value)
        raise ValueError("listener bug")

    gate = DebounceGate(DELAY, explode)
    gate.push("x")
    await asyncio.sleep(DELAY * 3)
    assert calls == ["x"]
    assert gate.pending is False

async def test_delay_must_be_positive():
    with pytest.raises(ValueError):
        DebounceGate(0, lambda v: None)
