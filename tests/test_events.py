"""Tests for the lifecycle event emitter."""
from unittest.mock import AsyncMock, Mock

import pytest

from docprocessor.utils.events import EventEmitter


@pytest.mark.asyncio
async def test_emit_calls_sync_and_async_listeners():
    emitter = EventEmitter()
    sync_listener = Mock()
    async_listener = AsyncMock()
    emitter.on("submit_started", sync_listener)
    emitter.on("submit_started", async_listener)

    await emitter.emit("submit_started", "payload")

    sync_listener.assert_called_once_with("payload")
    async_listener.assert_awaited_once_with("payload")


@pytest.mark.asyncio
async def test_listener_registered_once_and_removable():
    emitter = EventEmitter()
    listener = Mock()
    emitter.on("submit_failed", listener)
    emitter.on("submit_failed", listener)

    await emitter.emit("submit_failed")
    emitter.off("submit_failed", listener)
    await emitter.emit("submit_failed")

    assert listener.call_count == 1


@pytest.mark.asyncio
async def test_failing_listener_does_not_stop_others():
    emitter = EventEmitter()
    after = Mock()
    emitter.on("submit_succeeded", Mock(side_effect=RuntimeError("bug")))
    emitter.on("submit_succeeded", after)

    await emitter.emit("submit_succeeded", 1)

    after.assert_called_once_with(1)


@pytest.mark.asyncio
async def test_emit_without_listeners_is_noop():
    await EventEmitter().emit("unknown")
