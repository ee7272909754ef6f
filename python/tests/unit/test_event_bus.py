"""Tests for EventBus dispatch and payload typing."""

import pytest
from unittest.mock import MagicMock

from fixtures.catalog import make_kernelspec_dict
from kernel_selector.events import EventBus, EventKind, KernelCreated, KernelRef
from kernel_selector.protocols import KernelSpec


def _spec(name="python3", display_name="Python 3"):
    return KernelSpec.from_catalog_entry(name, make_kernelspec_dict(name, display_name))


class TestEventKind:
    def test_wire_names(self):
        assert EventKind.SELECTION_CHANGED.value == "spec_changed.Kernel"
        assert EventKind.KERNEL_CREATED.value == "kernel_created.Session"

    def test_lookup_by_wire_name(self):
        assert EventKind("kernel_created.Session") is EventKind.KERNEL_CREATED

    def test_payload_types(self):
        assert EventKind.SELECTION_CHANGED.payload_type is KernelSpec
        assert EventKind.KERNEL_CREATED.payload_type is KernelCreated


class TestKernelCreated:
    def test_from_dict(self):
        event = KernelCreated.from_dict({"kernel": {"name": "python3", "id": "k-1"}})
        assert event == KernelCreated(kernel=KernelRef(name="python3"))

    def test_from_dict_missing_kernel(self):
        with pytest.raises(KeyError):
            KernelCreated.from_dict({})


class TestPublishSubscribe:
    def test_publish_reaches_subscribers_in_order(self, bus):
        calls = []
        bus.subscribe(EventKind.SELECTION_CHANGED, lambda spec: calls.append(("a", spec.name)))
        bus.subscribe(EventKind.SELECTION_CHANGED, lambda spec: calls.append(("b", spec.name)))

        bus.publish(EventKind.SELECTION_CHANGED, _spec())

        assert calls == [("a", "python3"), ("b", "python3")]

    def test_kinds_are_independent(self, bus):
        handler = MagicMock()
        bus.subscribe(EventKind.KERNEL_CREATED, handler)

        bus.publish(EventKind.SELECTION_CHANGED, _spec())

        handler.assert_not_called()

    def test_subscribe_is_idempotent(self, bus):
        handler = MagicMock()
        bus.subscribe(EventKind.SELECTION_CHANGED, handler)
        bus.subscribe(EventKind.SELECTION_CHANGED, handler)

        bus.publish(EventKind.SELECTION_CHANGED, _spec())

        handler.assert_called_once()

    def test_unsubscribe(self, bus):
        handler = MagicMock()
        bus.subscribe(EventKind.SELECTION_CHANGED, handler)
        bus.unsubscribe(EventKind.SELECTION_CHANGED, handler)

        bus.publish(EventKind.SELECTION_CHANGED, _spec())

        handler.assert_not_called()
        assert bus.handlers(EventKind.SELECTION_CHANGED) == []

    def test_unsubscribe_unknown_handler_is_noop(self, bus):
        bus.unsubscribe(EventKind.KERNEL_CREATED, MagicMock())

    def test_wrong_payload_type_rejected(self, bus):
        handler = MagicMock()
        bus.subscribe(EventKind.KERNEL_CREATED, handler)

        with pytest.raises(TypeError):
            bus.publish(EventKind.KERNEL_CREATED, {"kernel": {"name": "python3"}})

        handler.assert_not_called()

    def test_failing_handler_does_not_stop_delivery(self, bus, mock_logger):
        def broken(spec):
            raise RuntimeError("boom")

        after = MagicMock()
        bus.subscribe(EventKind.SELECTION_CHANGED, broken)
        bus.subscribe(EventKind.SELECTION_CHANGED, after)

        bus.publish(EventKind.SELECTION_CHANGED, _spec())

        after.assert_called_once()
        mock_logger.error.assert_called_once()
        assert mock_logger.error.call_args[0][0] == "event_handler_error"
        assert mock_logger.error.call_args[1]["error"] == "boom"

    def test_nested_publish(self, bus):
        received = []
        spec = _spec()

        def on_created(event):
            bus.publish(EventKind.SELECTION_CHANGED, spec)

        bus.subscribe(EventKind.KERNEL_CREATED, on_created)
        bus.subscribe(EventKind.SELECTION_CHANGED, received.append)

        bus.publish(EventKind.KERNEL_CREATED, KernelCreated(kernel=KernelRef("python3")))

        assert received == [spec]

    def test_default_logger(self):
        bus = EventBus()
        bus.publish(EventKind.SELECTION_CHANGED, _spec())
