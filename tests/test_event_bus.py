"""Tests for the event bus system."""

from typing import Any

import pytest
from pydantic import BaseModel, Field

from gig_api.event_bus import EventBus, EventHandler, get_event_bus
from gig_api.event_bus.core import HandlerRegistrationError

SAMPLE_EVENT = "sample:happened"
OTHER_EVENT = "other:happened"


# Test payload models (don't start with "Test" to avoid pytest collection)
class SamplePayload(BaseModel):
    """Simple test payload."""

    message: str = Field(..., description="Test message")
    value: int = Field(default=42, description="Test value")


# Test handlers
async def simple_handler(payload: SamplePayload) -> str:
    """Simple function handler."""
    return f"processed: {payload.message}"


async def void_handler(_payload: SamplePayload) -> None:
    """Handler that returns nothing."""
    return


def sync_handler(payload: SamplePayload) -> str:
    """Synchronous handler."""
    return f"sync: {payload.message}"


class SampleEventHandler(EventHandler[SamplePayload]):
    """Test class-based handler."""

    def __init__(self):
        self.processed: list[str] = []

    async def handle(self, payload: SamplePayload) -> str:
        """Handle test payload."""
        result = f"class handled: {payload.message}"
        self.processed.append(result)
        return result


class FailingSampleHandler(EventHandler[SamplePayload]):
    """Handler that always fails."""

    async def handle(self, payload: SamplePayload) -> str:
        """Handle payload with failure."""
        raise ValueError("Test handler failure")


class TestEventBus:
    """Test cases for EventBus."""

    def test_event_bus_initialization(self):
        """Test EventBus initialization."""
        bus = EventBus()
        assert bus.get_handler_count(SAMPLE_EVENT) == 0
        assert bus.get_registered_events() == []
        assert bus.frozen is False

    def test_get_event_bus_singleton(self):
        """Test that get_event_bus returns singleton instance."""
        assert get_event_bus() is get_event_bus()

    def test_register_function_and_class_handlers(self):
        """Test registering function and class-based handlers."""
        bus = EventBus()
        bus.register(SAMPLE_EVENT, simple_handler)
        bus.on(SAMPLE_EVENT, SampleEventHandler())

        assert bus.get_handler_count(SAMPLE_EVENT) == 2
        assert bus.get_registered_events() == [SAMPLE_EVENT]

    def test_register_handler_empty_event_name(self):
        """Test registering handler without an event name."""
        bus = EventBus()

        with pytest.raises(HandlerRegistrationError):
            bus.register("", simple_handler)

    def test_register_handler_invalid_handler(self):
        """Test registering invalid handler."""
        bus = EventBus()

        with pytest.raises(HandlerRegistrationError):
            bus.register(SAMPLE_EVENT, "not_callable")  # type: ignore[arg-type]

    def test_register_after_freeze_rejected(self):
        """Test that a frozen bus refuses new handlers."""
        bus = EventBus()
        bus.register(SAMPLE_EVENT, simple_handler)
        bus.freeze()

        assert bus.frozen is True
        with pytest.raises(HandlerRegistrationError, match="frozen"):
            bus.register(SAMPLE_EVENT, void_handler)
        assert bus.get_handler_count(SAMPLE_EVENT) == 1

    def test_unregister_removes_handler(self):
        """Test the function returned by register."""
        bus = EventBus()
        unregister = bus.register(SAMPLE_EVENT, simple_handler)

        unregister()
        assert bus.get_handler_count(SAMPLE_EVENT) == 0
        assert bus.get_registered_events() == []

        # A second call is a no-op
        unregister()
        assert bus.get_handler_count(SAMPLE_EVENT) == 0

    def test_clear_handlers(self):
        """Test clearing handlers."""
        bus = EventBus()
        bus.register(SAMPLE_EVENT, simple_handler)
        bus.register(OTHER_EVENT, simple_handler)

        bus.clear_handlers(SAMPLE_EVENT)
        assert bus.get_handler_count(SAMPLE_EVENT) == 0
        assert bus.get_handler_count(OTHER_EVENT) == 1

        bus.clear_handlers()
        assert bus.get_registered_events() == []

    @pytest.mark.asyncio
    async def test_dispatch_no_handlers(self):
        """Test dispatching an event nobody listens to."""
        bus = EventBus()

        assert await bus.dispatch(SAMPLE_EVENT, SamplePayload(message="test")) == []

    @pytest.mark.asyncio
    async def test_dispatch_collects_results_in_order(self):
        """Test results come back in registration order without None results."""
        bus = EventBus()
        handler = SampleEventHandler()
        bus.register(SAMPLE_EVENT, simple_handler)
        bus.register(SAMPLE_EVENT, void_handler)
        bus.register(SAMPLE_EVENT, sync_handler)
        bus.register(SAMPLE_EVENT, handler)

        results = await bus.dispatch(SAMPLE_EVENT, SamplePayload(message="test"))

        assert results == ["processed: test", "sync: test", "class handled: test"]
        assert handler.processed == ["class handled: test"]

    @pytest.mark.asyncio
    async def test_dispatch_runs_handlers_sequentially(self):
        """Test each handler completes before the next one starts."""
        bus = EventBus()
        trace: list[str] = []

        async def first(_payload: Any) -> None:
            trace.append("first:start")
            trace.append("first:end")

        async def second(_payload: Any) -> None:
            trace.append("second:start")

        bus.register(SAMPLE_EVENT, first)
        bus.register(SAMPLE_EVENT, second)
        await bus.dispatch(SAMPLE_EVENT, {"any": "payload"})

        assert trace == ["first:start", "first:end", "second:start"]

    @pytest.mark.asyncio
    async def test_dispatch_failure_stops_later_handlers(self):
        """Test the first failing handler aborts the dispatch."""
        bus = EventBus()
        later = SampleEventHandler()
        bus.register(SAMPLE_EVENT, simple_handler)
        bus.register(SAMPLE_EVENT, FailingSampleHandler())
        bus.register(SAMPLE_EVENT, later)

        with pytest.raises(ValueError, match="Test handler failure"):
            await bus.dispatch(SAMPLE_EVENT, SamplePayload(message="test"))

        assert later.processed == []

    @pytest.mark.asyncio
    async def test_duplicate_registrations_are_independent(self):
        """Test the same handler registered twice runs twice and unregisters once."""
        bus = EventBus()
        first_unregister = bus.register(SAMPLE_EVENT, simple_handler)
        bus.register(SAMPLE_EVENT, simple_handler)

        assert await bus.dispatch(SAMPLE_EVENT, SamplePayload(message="x")) == ["processed: x", "processed: x"]

        first_unregister()
        assert await bus.dispatch(SAMPLE_EVENT, SamplePayload(message="x")) == ["processed: x"]

    @pytest.mark.asyncio
    async def test_unregister_during_dispatch_keeps_snapshot(self):
        """Test handlers removed mid-dispatch still run for the current dispatch."""
        bus = EventBus()
        calls: list[str] = []
        unregister_second = None

        def first(_payload: Any) -> str:
            calls.append("first")
            assert unregister_second is not None
            unregister_second()
            return "first"

        def second(_payload: Any) -> str:
            calls.append("second")
            return "second"

        bus.register(SAMPLE_EVENT, first)
        unregister_second = bus.register(SAMPLE_EVENT, second)

        assert await bus.dispatch(SAMPLE_EVENT, 1) == ["first", "second"]
        assert await bus.dispatch(SAMPLE_EVENT, 1) == ["first"]
        assert calls == ["first", "second", "first"]

    @pytest.mark.asyncio
    async def test_dispatch_without_payload(self):
        """Test payload-less events reach handlers with or without a parameter."""
        bus = EventBus()
        received: list[Any] = []

        def no_args() -> str:
            return "no args"

        def one_arg(payload: Any) -> str:
            received.append(payload)
            return "one arg"

        bus.register(SAMPLE_EVENT, no_args)
        bus.register(SAMPLE_EVENT, one_arg)

        assert await bus.dispatch(SAMPLE_EVENT) == ["no args", "one arg"]
        assert received == [None]
