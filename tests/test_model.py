"""Tests for Model — the public get/set/delete/bind surface."""

import pytest

from pathmodel import (
    Callback,
    ExternalTarget,
    Model,
    ModelOptions,
    PathTypeError,
    merge_defaults,
)


class _Node:
    def __init__(self, ref=None, parent=None):
        self.parent = parent
        if ref is not None:
            self.ref = ref
        self.records = []

    def on_model_update(self, record):
        self.records.append(record)


class TestGetSet:
    def test_set_then_get(self):
        m = Model()
        assert m.set("/a/b", 5) == 5
        assert m.get("/a/b") == 5
        assert m.get(["a", "b"]) == 5

    def test_relative_with_context(self):
        m = Model()
        m.set("name", "Ann", context="/user/3")
        assert m.get("/user/3/name") == "Ann"
        assert m.get("name", "/user/3") == "Ann"

    def test_relative_uses_global_context(self):
        m = Model(options=ModelOptions(global_context="/form"))
        m.set("field", 1)
        assert m.root == {"form": {"field": 1}}

    def test_array_materialization(self):
        m = Model()
        m.set("/list/0", "x")
        assert isinstance(m.get("/list"), list)
        assert len(m.get("/list")) == 1

    def test_map_materialization_without_arrays(self):
        m = Model(options=ModelOptions(create_arrays=False))
        m.set("/list/0", "x")
        assert m.get("/list") == {"0": "x"}

    def test_sparse_list_then_fill_gap(self):
        m = Model()
        m.set("/user/2/name", "Cy")
        assert m.set("/user/0/name", "Ann") == "Ann"
        assert m.get("/user/0/name") == "Ann"
        assert m.get("/user/1") is None
        assert m.get("/user/2/name") == "Cy"

    def test_set_through_none_value(self):
        m = Model({"a": None})
        calls = []
        m.bind("/a/b", calls.append)
        m.set("/a/b", 1)
        assert m.root == {"a": {"b": 1}}
        assert len(calls) == 1

    def test_get_does_not_materialize(self):
        m = Model()
        assert m.get("/a/b/c") is None
        assert m.root == {}

    def test_get_all(self):
        m = Model({"a": 1, "b": 2})
        assert m.get_all(["/a", "/b", "/c"]) == [1, 2, None]

    def test_initial_data_is_root(self):
        data = {"x": 1}
        assert Model(data).root is data

    def test_scope_node_reference(self):
        m = Model()
        field = _Node("name", parent=_Node("/user/3"))
        m.set(field, "Bo")
        assert m.get("/user/3/name") == "Bo"
        assert m.get(field) == "Bo"

    def test_unresolvable_is_noop(self):
        m = Model()
        log = []
        m.bind("/", lambda rec: log.append(rec))
        assert m.set(object(), 1) is None
        assert m.get(object()) is None
        assert m.delete(object()) is None
        assert m.bind(object(), print) is None
        assert m.root == {}

    def test_write_through_leaf_raises(self):
        m = Model({"a": 1})
        with pytest.raises(PathTypeError):
            m.set("/a/b", 2)

    def test_walk(self):
        m = Model({"a": {"b": 1}})
        seen = []
        assert m.walk("/a/b", lambda parent, path, i: seen.append(path[i])) == 1
        assert seen == ["a", "b"]
        assert m.walk("/a/x/y", lambda parent, path, i: None) is None


class TestNotification:
    def test_set_notifies_once_for_same_value(self):
        m = Model()
        log = []
        m.bind("/a", lambda rec: log.append(rec.value))
        m.set("/a", 1)
        m.set("/a", 1)
        assert log == [1]

    def test_hierarchical_bindings(self):
        m = Model()
        log = []
        m.bind("/a/b", lambda rec: log.append("/a/b"))
        m.bind("/a", lambda rec: log.append("/a"))
        m.set("/a/b/c", 1)
        assert log == ["/a", "/a/b"]

    def test_ancestors_see_current_subtree(self):
        m = Model({"a": {"x": 1}})
        values = []
        m.bind("/a", lambda rec: values.append(rec.value))
        m.set("/a/y", 2)
        assert values == [{"x": 1, "y": 2}]

    def test_unbind_removes_all_observers(self):
        m = Model()
        log = []
        m.bind("/p", lambda rec: log.append("f1"))
        m.bind("/p", lambda rec: log.append("f2"))
        m.unbind("/p")
        m.trigger("/p")
        m.set("/p", 1)
        assert log == []

    def test_bound(self):
        m = Model()
        obs = m.bind("/p", print)
        assert isinstance(obs, Callback)
        assert m.bound("/p") == [obs]
        assert m.bound("/q") is None

    def test_bind_without_observer_registers_ref(self):
        m = Model()
        node = _Node("/field")
        obs = m.bind(node)
        assert isinstance(obs, ExternalTarget)
        assert obs.handle is node
        m.set("/field", "x")
        assert [r.value for r in node.records] == ["x"]

    def test_source_exclusion(self):
        m = Model()
        origin, other, ancestor = _Node("/f/v"), _Node("/f/v"), _Node("/f")
        m.bind(origin)
        m.bind(other)
        m.bind(ancestor)
        m.set("/f/v", 3, source=origin)
        assert origin.records == []
        assert len(other.records) == 1
        assert len(ancestor.records) == 1

    def test_trigger_without_change(self):
        m = Model({"a": 1})
        events = []
        m.bind("/a", lambda rec: events.append(rec.event))
        m.trigger("/a", "delete")
        assert events == ["delete"]

    def test_reentrant_observer(self):
        m = Model()
        m.bind("/celsius", lambda rec: m.set("/fahrenheit", rec.value * 9 / 5 + 32))
        log = []
        m.bind("/fahrenheit", lambda rec: log.append(rec.value))
        m.set("/celsius", 100)
        assert m.get("/fahrenheit") == 212
        assert log == [212]

    def test_root_binding_never_fires(self):
        m = Model()
        log = []
        m.bind("/", lambda rec: log.append(rec))
        m.set("/a", 1)
        assert log == []


class TestDelete:
    def test_delete_returns_previous_and_notifies(self):
        m = Model({"a": {"b": 1}})
        records = []
        m.bind("/a/b", records.append)
        assert m.delete("/a/b") == 1
        assert m.get("/a/b") is None
        assert records[0].event == "delete"
        assert records[0].value is None

    def test_delete_list_item_shifts_indices(self):
        m = Model({"items": ["a", "b", "c"]})
        m.delete("/items/1")
        assert m.get("/items") == ["a", "c"]
        assert m.get("/items/1") == "c"

    def test_delete_missing_intermediate_is_noop(self):
        m = Model({"keep": 1})
        log = []
        m.bind("/x", lambda rec: log.append(rec))
        assert m.delete("/x/y/z") is None
        assert m.root == {"keep": 1}
        assert log == []

    def test_delete_missing_terminal_still_notifies(self):
        m = Model({"a": {}})
        log = []
        m.bind("/a", lambda rec: log.append(rec.event))
        assert m.delete("/a/nope") is None
        assert log == ["delete"]

    def test_delete_with_source(self):
        m = Model({"v": 1})
        origin, other = _Node("/v"), _Node("/v")
        m.bind(origin)
        m.bind(other)
        m.delete("/v", source=origin)
        assert origin.records == []
        assert len(other.records) == 1


class TestDefaults:
    def test_existing_values_win(self):
        m = Model()
        m.defaults("/x", {"k": 1})
        m.defaults("/x", {"k": 2})
        assert m.get("/x/k") == 1

    def test_idempotent_notification(self):
        m = Model()
        log = []
        m.bind("/x", lambda rec: log.append(rec.value))
        m.defaults("/x", {"k": 1, "nested": {"a": 1}})
        m.defaults("/x", {"k": 1, "nested": {"a": 1}})
        assert len(log) == 1

    def test_deep_merge(self):
        m = Model({"cfg": {"db": {"host": "prod"}}})
        m.defaults("/cfg", {"db": {"host": "localhost", "port": 5432}, "debug": False})
        assert m.get("/cfg") == {"db": {"host": "prod", "port": 5432}, "debug": False}

    def test_defaults_are_copied(self):
        defaults = {"tags": ["a"]}
        m = Model()
        m.defaults("/x", defaults)
        m.get("/x/tags").append("b")
        assert defaults == {"tags": ["a"]}

    def test_merge_defaults_non_mapping_current_wins(self):
        assert merge_defaults(3, {"a": 1}) == 3
        assert merge_defaults([1], {"a": 1}) == [1]
        assert merge_defaults(None, {"a": 1}) == {"a": 1}


def test_repr():
    m = Model({"a": 1})
    m.bind("/a", print)
    assert repr(m) == "Model({'a': 1}, bindings=1)"
