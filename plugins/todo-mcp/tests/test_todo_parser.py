"""
Tests for parsers/todo_parser.py.

Covers:
- parse_todos: open/done items, line numbers, trimming, indentation
- Lines that resemble tasks but do not match the checkbox grammar
- Metadata derived from item text
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from models.todo import TodoItem
from parsers.todo_parser import is_task_line, parse_todos


# ---------------------------------------------------------------------------
# parse_todos
# ---------------------------------------------------------------------------

class TestParseTodos:
    def test_empty_document(self):
        assert parse_todos("") == []

    def test_no_todos(self):
        assert parse_todos("# Notes\n\nSome text here.\n") == []

    def test_single_open_todo(self):
        assert parse_todos("- [ ] Buy milk") == [
            TodoItem(
                line_no=0,
                raw="- [ ] Buy milk",
                done=False,
                text="Buy milk",
                tags=(),
                priority=None,
                due_date=None,
            )
        ]

    def test_single_done_todo(self):
        items = parse_todos("- [x] Buy milk")
        assert len(items) == 1
        assert items[0].done is True
        assert items[0].text == "Buy milk"

    def test_uppercase_x_is_done(self):
        assert parse_todos("- [X] Done task")[0].done is True

    def test_mixed_open_and_done(self):
        md = "\n".join([
            "# TODO",
            "",
            "- [ ] Open task",
            "- [x] Done task",
            "- [ ] Another open",
        ])
        items = parse_todos(md)
        assert [(t.line_no, t.done, t.text) for t in items] == [
            (2, False, "Open task"),
            (3, True, "Done task"),
            (4, False, "Another open"),
        ]

    def test_indented_todo(self):
        items = parse_todos("  - [ ] Indented task")
        assert items[0].text == "Indented task"
        assert items[0].raw == "  - [ ] Indented task"

    def test_line_numbers_survive_blank_lines(self):
        md = "\n".join(["# Header", "", "- [ ] First", "", "- [x] Second"])
        assert [t.line_no for t in parse_todos(md)] == [2, 4]

    def test_text_is_trimmed(self):
        assert parse_todos("- [ ]   Lots of spaces   ")[0].text == "Lots of spaces"

    def test_crlf_line_ending_trimmed(self):
        items = parse_todos("- [ ] First\r\n- [x] Second\r\n")
        assert [t.text for t in items] == ["First", "Second"]

    def test_duplicate_lines_get_distinct_line_numbers(self):
        items = parse_todos("- [ ] Same\n- [ ] Same")
        assert [t.line_no for t in items] == [0, 1]


class TestNonTaskLines:
    def test_similar_lines_ignored(self):
        md = "\n".join([
            "- Regular list item",
            "- [] Missing space",
            "- [a] Wrong character",
            "- [  ] Two spaces",
            "Some - [ ] inline text",
            "* [ ] Star bullet",
        ])
        assert parse_todos(md) == []

    def test_is_task_line(self):
        assert is_task_line("- [ ] Task")
        assert is_task_line("  -[x]Tight")
        assert not is_task_line("- [ ]")
        assert not is_task_line("## Heading")


# ---------------------------------------------------------------------------
# Metadata on parsed items
# ---------------------------------------------------------------------------

class TestParsedMetadata:
    def test_tags(self):
        assert parse_todos("- [ ] Fix login #dev #backend")[0].tags == ("dev", "backend")

    def test_priority(self):
        assert parse_todos("- [ ] Fix login !HIGH")[0].priority == "high"

    def test_due_date(self):
        assert parse_todos("- [ ] Pay rent @due(2024-07-01)")[0].due_date == "2024-07-01"

    def test_annotations_stay_in_text(self):
        item = parse_todos("- [ ] Fix login #dev !high @due(2024-03-01)")[0]
        assert item.text == "Fix login #dev !high @due(2024-03-01)"
        assert item.tags == ("dev",)
        assert item.priority == "high"
        assert item.due_date == "2024-03-01"

    def test_status_property(self):
        open_item, done_item = parse_todos("- [ ] a\n- [x] b")
        assert open_item.status == "open"
        assert done_item.status == "done"
