from __future__ import annotations

import pytest

from docstore import MISSING, DocumentRoot, StructuralConflictError, TypeGuardError
from persistence import MemoryEngine


def _db(doc=None) -> DocumentRoot:
    return DocumentRoot(MemoryEngine(doc))


def test_get_returns_new_accessor_and_is_lazy():
    db = _db()
    base = db.get("a")
    deeper = base.get("b")
    assert base.path.segments == ("a",)
    assert deeper.path.segments == ("a", "b")
    # nothing was created by building accessors
    assert db.document == {}

    db.set("a.b", 1)
    assert deeper.value() == 1


def test_get_keeps_segment_identity():
    db = _db()
    db.get(1).set("int")
    db.get("1").set("str")
    db.get("a.b").set("dotted")
    assert db.document == {1: "int", "1": "str", "a.b": "dotted"}
    assert db.get("a").value() is None


def test_value_default_and_missing_marker():
    db = _db({"nothing": None})
    assert db.get("absent").value() is None
    assert db.get("absent").value("fallback") == "fallback"
    assert db.get("absent").value(MISSING) is MISSING
    assert db.get("nothing").value(MISSING) is None
    assert db.get("nothing").exists() is True
    assert db.get("absent").exists() is False


def test_value_through_non_container_is_missing():
    db = _db({"s": "text"})
    assert db.get("s").get("deeper").get("deepest").value() is None


def test_set_round_trip_through_absent_containers():
    db = _db()
    db.get("x").get("y").get("z").set([1, 2])
    assert db.get("x").get("y").get("z").value() == [1, 2]
    assert db.document == {"x": {"y": {"z": [1, 2]}}}


def test_dotted_set_matches_chained_get():
    db = _db()
    db.set("a.b", "v")
    assert db.get("a").get("b").value() == "v"
    db.set(["c", 2], "w")
    assert db.get("c").get(2).value() == "w"


def test_set_shorthand_is_one_level_down():
    db = _db({"obj": {}})
    db.get("obj").set("k", "v")
    assert db.get("obj").value() == {"k": "v"}
    # set(None) stores None, it is not the two-argument form
    db.get("obj").get("k").set(None)
    assert db.get("obj").value() == {"k": None}


def test_set_through_scalar_conflicts():
    db = _db({"s": "text"})
    with pytest.raises(StructuralConflictError):
        db.get("s").get("k").set(1)
    assert db.document == {"s": "text"}
    assert not db.dirty


def test_mutations_visible_to_all_accessors():
    db = _db({"lst": []})
    a = db.get("lst")
    b = db.get("lst")
    a.push(1)
    assert b.value() == [1]
    assert a == b
    assert hash(a) == hash(b)


def test_chaining_returns_receiver():
    db = _db({"test-list": [1, 2, 3]})
    assert db.get("test-list").push("x").value() == [1, 2, 3, "x"]
    assert db.get("test-list").filter(lambda v: v != "x").map(lambda v: v * 10).value() == [10, 20, 30]


def test_push_preserves_order():
    db = _db({"lst": ["a", "b"]})
    db.get("lst").push("c").push("d")
    assert db.get("lst").value() == ["a", "b", "c", "d"]


@pytest.mark.parametrize("path", ["string", "number", "map", "none", "absent"])
def test_list_operations_guard_type(path):
    db = _db({"string": "s", "number": 3, "map": {"a": 1}, "none": None})
    before = dict(db.document)
    acc = db.get(path)
    with pytest.raises(TypeGuardError):
        acc.push(1)
    with pytest.raises(TypeGuardError):
        acc.map(lambda x: x)
    with pytest.raises(TypeGuardError):
        acc.filter(bool)
    with pytest.raises(TypeGuardError):
        acc.sort()
    with pytest.raises(TypeGuardError):
        acc.reduce(lambda a, b: a + b, 0).value()
    assert db.document == before
    assert not db.dirty


def test_type_guard_error_details():
    db = _db({"s": "text"})
    with pytest.raises(TypeGuardError) as exc:
        db.get("s").push(1)
    assert exc.value.operation == "push"
    assert exc.value.actual == "str"
    assert isinstance(exc.value, TypeError)

    with pytest.raises(TypeGuardError) as exc:
        db.get("nope").push(1)
    assert exc.value.actual == "missing"


def test_map_is_pure_and_ordered():
    db = _db({"lst": [[1], [2, 3]]})
    db.get("lst").map(lambda x: x)
    assert db.get("lst").value() == [[1], [2, 3]]
    db.get("lst").map(len)
    assert db.get("lst").value() == [1, 2]


def test_failing_map_leaves_list_untouched():
    db = _db({"lst": [1, 0, 2]})

    with pytest.raises(ZeroDivisionError):
        db.get("lst").map(lambda x: 1 / x)
    assert db.get("lst").value() == [1, 0, 2]
    assert not db.dirty


def test_sort_and_reduce():
    db = _db({"lst": [3, 1, 2]})
    db.get("lst").sort()
    assert db.get("lst").value() == [1, 2, 3]
    db.get("lst").sort(reverse=True)
    assert db.get("lst").value() == [3, 2, 1]
    assert db.get("lst").reduce(lambda a, b: a + b).value() == 6
    assert db.get("lst").reduce(lambda a, b: a + [b], []).value() == [3, 2, 1]
    # reduce does not write
    assert db.get("lst").value() == [3, 2, 1]


def test_delete_absent_is_noop():
    db = _db({"a": 1})
    db.get("b").delete()
    db.get("a").get("b").get("c").delete()
    assert db.document == {"a": 1}
    assert not db.dirty


def test_delete_marks_dirty():
    db = _db({"a": 1})
    db.get("a").delete()
    assert db.get("a").value() is None
    assert db.dirty


def test_length_of_each_kind():
    db = _db({"lst": [1, 2, 3, 4, 5], "map": {"a": 1, "b": 2}, "s": "héllo", "n": 7})
    assert db.get("lst").length().value() == 5
    assert db.get("map").length().value() == 2
    assert db.get("s").length().value() == 5
    assert db.get("absent").length().value() is None
    with pytest.raises(TypeGuardError):
        db.get("n").length().value()


def test_length_tracks_current_document():
    db = _db({"lst": [1]})
    size = db.get("lst").length()
    db.get("lst").push(2)
    assert size.value() == 2


def test_whole_document_accessor_operations():
    db = _db([1, 2])
    db.at([]).push(3)
    assert db.value() == [1, 2, 3]
    db.at("").map(lambda x: -x)
    assert db.value() == [-1, -2, -3]


def test_whole_document_delete_on_empty_document_stays_clean():
    db = _db()
    db.at([]).delete()
    assert db.document == {}
    assert not db.dirty

    db.set("a", 1)
    db.save()
    db.at([]).delete()
    assert db.document == {}
    assert db.dirty


def test_unusual_digit_segment_reads_missing_and_deletes_nothing():
    db = _db({"lst": [1, 2]})
    assert db.get("lst").get("²").value(MISSING) is MISSING
    db.get("lst").get("²").delete()
    assert db.get("lst").value() == [1, 2]
    assert not db.dirty
