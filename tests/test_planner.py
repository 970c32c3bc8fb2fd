"""Tests for planner module."""

import json

import pytest

from tfs.categories import ORDER, Category
from tfs.exceptions import PlanFormatError
from tfs.plan_reader import ResourceChange
from tfs.planner import classify, has_changes, load_buckets, print_plan, summarize


def _rc(address, *actions, **maps):
    type_, name = address.split(".", 1)
    return ResourceChange(address, type_, name, tuple(actions), **maps)


class TestClassify:
    # Tests that every category is present even when empty.
    def test_all_categories_present(self):
        buckets = classify([])
        assert list(buckets) == list(ORDER)
        assert all(v == [] for v in buckets.values())

    # Tests each classification rule.
    @pytest.mark.parametrize("actions,expected", [
        (("create",), Category.CREATE),
        (("delete",), Category.DESTROY),
        (("update",), Category.UPDATE),
        (("delete", "create"), Category.REPLACE),
        (("create", "delete"), Category.CREATE),
        (("no-op",), Category.OTHER),
        (("read",), Category.OTHER),
        (("import",), Category.OTHER),
        (("something-new",), Category.OTHER),
    ])
    def test_rules(self, actions, expected):
        rc = _rc("t.n", *actions)
        buckets = classify([rc])
        assert buckets[expected] == [rc]
        assert sum(len(v) for v in buckets.values()) == 1

    # Tests that changes with no actions are skipped without error.
    def test_empty_actions_skipped(self):
        buckets = classify([_rc("t.n")])
        assert sum(len(v) for v in buckets.values()) == 0

    # Tests that input order is kept inside each bucket.
    def test_order_preserved(self):
        changes = [_rc("t.c", "create"), _rc("t.d", "delete"), _rc("t.a", "create"), _rc("t.b", "create")]
        buckets = classify(changes)
        assert [rc.address for rc in buckets[Category.CREATE]] == ["t.c", "t.a", "t.b"]


class TestSummarize:
    # Tests per-category counts.
    def test_counts(self):
        buckets = classify([_rc("t.a", "create"), _rc("t.b", "create"), _rc("t.c", "no-op")])
        assert summarize(buckets) == {
            "create": 2, "destroy": 0, "replace": 0, "update": 0, "other": 1,
        }

    # Tests that only no-op changes do not count as changes.
    def test_has_changes_ignores_other(self):
        assert not has_changes(classify([_rc("t.a", "no-op")]))
        assert has_changes(classify([_rc("t.a", "update")]))


class TestPrintPlan:
    # Tests that an empty plan prints the up-to-date message.
    def test_no_changes(self, capsys):
        print_plan(classify([]))
        out = capsys.readouterr().out
        assert "Plan: 0 to create" in out
        assert "No changes" in out

    # Tests that changed resources are printed with their diff blocks.
    def test_prints_blocks(self, capsys):
        buckets = classify([_rc("t.a", "create", after={"x": "1"}), _rc("t.b", "no-op")])
        print_plan(buckets)
        out = capsys.readouterr().out
        assert "Plan: 1 to create, 0 to destroy, 0 to replace, 0 to update, 1 other." in out
        assert "# t.a will be created" in out
        assert '+ x = "1"' in out
        assert "t.b" not in out

    # Tests that verbose mode includes the other bucket.
    def test_verbose_includes_other(self, capsys):
        print_plan(classify([_rc("t.b", "no-op")]), verbose=True)
        out = capsys.readouterr().out
        assert "# t.b will be left unchanged" in out
        assert "No changes" not in out


class TestLoadBuckets:
    # Tests loading a JSON plan file when terraform is not available.
    def test_loads_json_file(self, tmp_path):
        path = tmp_path / "plan.json"
        path.write_text(json.dumps({"resource_changes": [
            {"address": "t.a", "type": "t", "name": "a", "change": {"actions": ["delete", "create"]}},
        ]}))
        buckets = load_buckets(str(path), terraform_bin=str(tmp_path / "no-such-terraform"))
        assert [rc.address for rc in buckets[Category.REPLACE]] == ["t.a"]

    # Tests that a malformed plan file fails before any bucket is built.
    def test_malformed_file_raises(self, tmp_path):
        path = tmp_path / "plan.json"
        path.write_text('{"resource_changes": "nope"}')
        with pytest.raises(PlanFormatError):
            load_buckets(str(path), terraform_bin=str(tmp_path / "no-such-terraform"))
