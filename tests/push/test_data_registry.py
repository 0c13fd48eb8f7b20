"""Tests for request-scoped and global data injection."""

from pagekit.push import DataRegistry, merge_data
from pagekit.push.data import MERGE_HELPER
from pagekit.push.request import DATA_ATTRIBUTE

GUARD = (
    "  pagekit.data = pagekit.data || {};\n"
    f"  pagekit.merge = pagekit.merge || {MERGE_HELPER};"
)


class TestDataScript:
    """Test the emitted merge script."""

    def test_empty_emits_guard_only(self, request_carrier):
        registry = DataRegistry()
        assert registry.request_data(request_carrier) == GUARD
        assert not hasattr(request_carrier, DATA_ATTRIBUTE)

    def test_one_merge_per_datum(self, request_carrier):
        registry = DataRegistry()
        registry.push_request_data(request_carrier, {"a": 1})
        registry.push_request_data(request_carrier, {"a": {"x": [1, 2]}})
        assert registry.request_data(request_carrier) == (
            GUARD + "\n"
            '  pagekit.merge(pagekit.data, {"a":1});\n'
            '  pagekit.merge(pagekit.data, {"a":{"x":[1,2]}});'
        )

    def test_helper_replaces_arrays(self):
        # Arrays and scalars are assigned; only plain objects recurse.
        assert "if (value && typeof value === 'object' && !Array.isArray(value))" in MERGE_HELPER
        assert "} else { target[key] = value; }" in MERGE_HELPER
        assert "Array.isArray(existing)) { existing = target[key] = {}; }" in MERGE_HELPER

    def test_array_fragments_in_order(self, request_carrier):
        registry = DataRegistry()
        registry.push_request_data(request_carrier, {"a": [1, 2, 3]})
        registry.push_request_data(request_carrier, {"a": [4]})
        lines = registry.request_data(request_carrier).split("\n")
        assert lines[2:] == [
            '  pagekit.merge(pagekit.data, {"a":[1,2,3]});',
            '  pagekit.merge(pagekit.data, {"a":[4]});',
        ]
        assert merge_data([{"a": [1, 2, 3]}, {"a": [4]}]) == {"a": [4]}

    def test_custom_namespace_and_merge_function(self, request_carrier):
        registry = DataRegistry(namespace="apos", merge_function="$.extend", indent="")
        registry.push_request_data(request_carrier, {"uploadsUrl": "/uploads"})
        assert registry.request_data(request_carrier) == (
            "apos.data = apos.data || {};\n"
            '$.extend(true, apos.data, {"uploadsUrl":"/uploads"});'
        )

    def test_global_data(self):
        registry = DataRegistry()
        registry.push_global_data({"site": {"name": "Example"}})
        expected = GUARD + '\n  pagekit.merge(pagekit.data, {"site":{"name":"Example"}});'
        assert registry.global_data() == expected
        assert registry.global_data() == expected

    def test_global_and_request_are_separate(self, request_carrier):
        registry = DataRegistry()
        registry.push_global_data({"g": 1})
        registry.push_request_data(request_carrier, {"r": 1})
        assert '"r"' not in registry.global_data()
        assert '"g"' not in registry.request_data(request_carrier)


class TestMergeData:
    """Test the server-side mirror of the client merge."""

    def test_later_scalar_wins(self):
        assert merge_data([{"a": 1}, {"a": 2}]) == {"a": 2}

    def test_nested_objects_merge(self):
        assert merge_data([{"a": {"x": 1}}, {"a": {"y": 2}}]) == {"a": {"x": 1, "y": 2}}

    def test_lists_replace(self):
        assert merge_data([{"a": [1, 2, 3]}, {"a": [4]}]) == {"a": [4]}

    def test_object_replaces_scalar(self):
        assert merge_data([{"a": 1}, {"a": {"b": 2}}]) == {"a": {"b": 2}}

    def test_order_matters(self):
        assert merge_data([{"a": 2}, {"a": 1}]) == {"a": 1}

    def test_inputs_not_mutated(self):
        first = {"a": {"x": 1}}
        second = {"a": {"y": [1]}}
        merged = merge_data([first, second])
        merged["a"]["y"].append(2)
        assert first == {"a": {"x": 1}}
        assert second == {"a": {"y": [1]}}

    def test_non_dict_fragments_ignored(self):
        assert merge_data([{"a": 1}, [1, 2], "text"]) == {"a": 1}
