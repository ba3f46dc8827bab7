"""Tests for namespaces and the counter taxonomy."""

from datetime import datetime, timezone

from ifacestat.metrics import (
    COUNTER_INFO,
    COUNTER_NAMES,
    Metric,
    Namespace,
)


def test_sixteen_counters_in_column_order():
    assert len(COUNTER_NAMES) == 16
    assert COUNTER_NAMES[:2] == ("bytes_recv", "packets_recv")
    assert COUNTER_NAMES[7] == "multicast_recv"
    assert COUNTER_NAMES[8] == "bytes_sent"
    assert COUNTER_NAMES[-1] == "multicast_sent"


def test_every_counter_has_unit_and_description():
    for name in COUNTER_NAMES:
        info = COUNTER_INFO[name]
        assert info.unit
        assert info.description
    assert COUNTER_INFO["bytes_recv"].unit == "B"
    assert "transmitted" in COUNTER_INFO["packets_sent"].description


def test_namespace_text_form():
    ns = Namespace.for_counter("lo", "bytes_recv")
    assert str(ns) == "/intel/procfs/iface/lo/bytes_recv"
    assert ns.interface == "lo"
    assert ns.counter == "bytes_recv"
    assert not ns.is_wildcard


def test_namespace_parse():
    ns = Namespace.parse("/intel/procfs/iface/p3p1/packets_sent")
    assert ns == Namespace.for_counter("p3p1", "packets_sent")
    assert Namespace.parse("intel/procfs/iface/lo/drop_recv/") == Namespace.for_counter("lo", "drop_recv")


def test_namespace_parse_empty():
    ns = Namespace.parse("/")
    assert ns.elements == ()
    assert ns.interface is None
    assert ns.counter is None


def test_wildcard_namespace():
    ns = Namespace.for_counter("*", "errs_recv")
    assert ns.is_wildcard
    assert str(ns) == "/intel/procfs/iface/*/errs_recv"


def test_metric_summary():
    ts = datetime(2024, 1, 1, tzinfo=timezone.utc)
    m = Metric(namespace=Namespace.for_counter("lo", "bytes_recv"), data=42, timestamp=ts, unit="B")
    summary = m.summary()
    assert summary["namespace"] == "/intel/procfs/iface/lo/bytes_recv"
    assert summary["data"] == 42
    assert summary["timestamp"] == ts.isoformat()


def test_catalog_metric_summary_has_no_timestamp():
    m = Metric(namespace=Namespace.for_counter("*", "bytes_recv"))
    assert m.summary()["timestamp"] is None
    assert m.summary()["data"] is None


def test_namespace_from_list_is_normalised():
    ns = Namespace(["intel", "procfs", "iface", "lo", "bytes_recv"])
    assert ns.elements == ("intel", "procfs", "iface", "lo", "bytes_recv")
    assert ns == Namespace.for_counter("lo", "bytes_recv")
    assert hash(ns) == hash(Namespace.for_counter("lo", "bytes_recv"))
