"""
Tests for query/search.py.

Covers:
- parse_query token classification
- search_todos: text, tag (AND), priority (OR), due scopes, combinations
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest

from parsers.todo_parser import parse_todos
from query.search import parse_query, search_todos

TODAY = "2024-06-15"

SAMPLE_MD = "\n".join([
    "- [ ] Fix login page #dev #frontend !high",
    "- [ ] Update README #docs !low",
    "- [ ] Review PR #backend #dev",
    "- [ ] Buy coffee",
    "- [x] Done task #dev !medium",
])

DUE_MD = "\n".join([
    "- [ ] Overdue task @due(2024-06-01)",
    "- [ ] Due today task @due(2024-06-15)",
    "- [ ] Future task @due(2024-07-01)",
    "- [ ] No due date task",
])


@pytest.fixture
def open_items():
    return [t for t in parse_todos(SAMPLE_MD) if not t.done]


@pytest.fixture
def due_items():
    return parse_todos(DUE_MD)


def _texts(items):
    return [t.text for t in items]


# ---------------------------------------------------------------------------
# parse_query
# ---------------------------------------------------------------------------

class TestParseQuery:
    def test_classifies_tokens(self):
        q = parse_query("#Dev !HIGH @overdue fix   Login")
        assert q.tags == ["dev"]
        assert q.priorities == ["high"]
        assert q.due_scope == "overdue"
        assert q.text == "fix login"

    def test_empty_query(self):
        q = parse_query("   ")
        assert q.tags == []
        assert q.priorities == []
        assert q.due_scope is None
        assert q.text == ""

    def test_partial_markers_are_free_text(self):
        q = parse_query("#dev! !urgent @due(2024")
        assert q.tags == []
        assert q.priorities == []
        assert q.due_scope is None
        assert q.text == "#dev! !urgent @due(2024"

    def test_last_scope_wins(self):
        assert parse_query("@today @overdue").due_scope == "overdue"
        assert parse_query("@OVERDUE @Due").due_scope == "any"


# ---------------------------------------------------------------------------
# search_todos
# ---------------------------------------------------------------------------

class TestSearchTodos:
    def test_whitespace_query_matches_all(self, open_items):
        assert search_todos(open_items, "   ") == open_items

    def test_text_substring(self, open_items):
        assert _texts(search_todos(open_items, "login")) == ["Fix login page #dev #frontend !high"]

    def test_text_case_insensitive(self, open_items):
        assert _texts(search_todos(open_items, "readme")) == ["Update README #docs !low"]

    def test_single_tag(self, open_items):
        result = search_todos(open_items, "#dev")
        assert len(result) == 2
        assert all("dev" in t.tags for t in result)

    def test_tags_are_anded(self, open_items):
        result = search_todos(open_items, "#dev #frontend")
        assert len(result) == 1
        assert set(result[0].tags) >= {"dev", "frontend"}

    def test_priority(self, open_items):
        result = search_todos(open_items, "!HIGH")
        assert [t.priority for t in result] == ["high"]

    def test_priorities_are_ored(self, open_items):
        result = search_todos(open_items, "!high !low")
        assert [t.priority for t in result] == ["high", "low"]

    def test_priority_excludes_unprioritised(self, open_items):
        assert search_todos(open_items, "!medium") == []

    def test_tag_and_text(self, open_items):
        assert len(search_todos(open_items, "#dev login")) == 1

    def test_tag_and_priority(self, open_items):
        assert len(search_todos(open_items, "#dev !high")) == 1

    def test_multi_word_text(self, open_items):
        assert _texts(search_todos(open_items, "Buy   coffee")) == ["Buy coffee"]

    def test_text_matches_marker_literals(self, open_items):
        assert search_todos(open_items, "#dev!") == []
        assert _texts(search_todos(open_items, "docs")) == ["Update README #docs !low"]
        assert _texts(search_todos(open_items, "!hig")) == ["Fix login page #dev #frontend !high"]

    def test_no_match(self, open_items):
        assert search_todos(open_items, "nonexistent") == []
        assert search_todos(open_items, "#zzz") == []

    def test_input_order_preserved(self, open_items):
        assert search_todos(open_items, "e") == [t for t in open_items if "e" in t.text.lower()]


class TestDueScopes:
    def test_due_any(self, due_items):
        result = search_todos(due_items, "@due", TODAY)
        assert len(result) == 3
        assert all(t.due_date is not None for t in result)

    def test_overdue(self, due_items):
        assert _texts(search_todos(due_items, "@overdue", TODAY)) == [
            "Overdue task @due(2024-06-01)"
        ]

    def test_today(self, due_items):
        assert _texts(search_todos(due_items, "@TODAY", TODAY)) == [
            "Due today task @due(2024-06-15)"
        ]

    def test_scope_with_text(self, due_items):
        assert search_todos(due_items, "@due future", TODAY)[0].due_date == "2024-07-01"

    def test_last_scope_token_wins(self, due_items):
        assert _texts(search_todos(due_items, "@overdue @today", TODAY)) == [
            "Due today task @due(2024-06-15)"
        ]

    def test_literal_annotation_as_text(self, due_items):
        assert len(search_todos(due_items, "@due(2024-06", TODAY)) == 2
