"""
Tests for the Report Store: keyed, total operations and order.
"""

import itertools

from ireporter.models.report import ReportStatus
from ireporter.services.report_store import ReportStore
from tests.conftest import make_report


def test_load_replaces_collection(sample_store):
    sample_store.load([make_report("3")])
    assert sample_store.ids() == ["3"]


def test_insert_appends_in_order():
    store = ReportStore()
    store.insert(make_report("b"))
    store.insert(make_report("a"))
    assert store.ids() == ["b", "a"]


def test_insert_existing_id_keeps_ids_unique(sample_store):
    sample_store.insert(make_report("1", title="Replaced"))
    assert sample_store.ids() == ["1", "2"]
    assert sample_store.get("1").title == "Replaced"


def test_insert_without_id_is_ignored():
    store = ReportStore()
    store.insert(make_report(None))
    assert len(store) == 0


def test_patch_merges_fields(sample_store):
    sample_store.patch("1", {"title": "Pothole (deeper)", "status": ReportStatus.UNDER_INVESTIGATION})
    report = sample_store.get("1")
    assert report.title == "Pothole (deeper)"
    assert report.status is ReportStatus.UNDER_INVESTIGATION
    assert report.description == "Deep hole on Allen Avenue"


def test_patch_never_rewrites_id(sample_store):
    sample_store.patch("1", {"id": "99"})
    assert sample_store.get("1").id == "1"
    assert "99" not in sample_store


def test_patch_and_remove_unknown_id_are_noops(sample_store):
    before = sample_store.snapshot()
    sample_store.patch("missing", {"title": "x"})
    sample_store.remove("missing")
    assert sample_store.snapshot() == before


def test_remove_deletes_only_target(sample_store):
    sample_store.remove("1")
    assert sample_store.ids() == ["2"]


def _interleavings(*sequences):
    """Every merge of the sequences that keeps each one's internal order."""
    if all(not s for s in sequences):
        yield []
        return
    for i, seq in enumerate(sequences):
        if seq:
            rest = list(sequences)
            rest[i] = seq[1:]
            for tail in _interleavings(*rest):
                yield [seq[0]] + tail


def test_interleaved_operations_on_distinct_ids_converge():
    ops_a = [("insert", make_report("a", title="A")), ("patch", "a", {"title": "A2"})]
    ops_b = [("insert", make_report("b")), ("remove", "b")]
    ops_c = [("insert", make_report("c", title="C"))]

    outcomes = set()
    for order in _interleavings(ops_a, ops_b, ops_c):
        store = ReportStore()
        for op in order:
            if op[0] == "insert":
                store.insert(op[1])
            elif op[0] == "patch":
                store.patch(op[1], op[2])
            else:
                store.remove(op[1])
        outcomes.add(frozenset((r.id, r.title) for r in store))

    assert outcomes == {frozenset({("a", "A2"), ("c", "C")})}


def test_iteration_is_a_snapshot(sample_store):
    seen = []
    for report in sample_store:
        seen.append(report.id)
        sample_store.remove(report.id)
    assert seen == ["1", "2"]
    assert len(sample_store) == 0


def test_order_preserved_across_permutations():
    reports = [make_report(str(i)) for i in range(4)]
    for perm in itertools.permutations(reports):
        store = ReportStore(perm)
        assert store.ids() == [r.id for r in perm]
