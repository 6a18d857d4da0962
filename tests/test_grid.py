"""
Unit tests for column resolution and row decoding.
"""

import pytest

from grid import cell_text, decode_row, resolve_column, resolve_grid_columns
from schemas import GradeRecord, Node, Row
from config import COURSE_PROPERTY_NAME, GRADE_PROPERTY_NAME


class TestResolveColumn:
    """Test resolution of semantic column names to per-load ids."""

    def test_label_preferred_over_property_name(self):
        columns = [{"id": 1, "label": "Course"}, {"id": 2, "propertyName": COURSE_PROPERTY_NAME}]
        assert resolve_column(columns, "Course", COURSE_PROPERTY_NAME) == 1

    def test_label_preferred_even_when_listed_later(self):
        columns = [{"id": 2, "propertyName": COURSE_PROPERTY_NAME}, {"id": 1, "label": "Course"}]
        assert resolve_column(columns, "Course", COURSE_PROPERTY_NAME) == 1

    def test_falls_back_to_property_name(self):
        columns = [{"columnId": "x9", "label": "Kurs", "propertyName": COURSE_PROPERTY_NAME}]
        assert resolve_column(columns, "Course", COURSE_PROPERTY_NAME) == "x9"

    def test_oddly_shaped_columns_ignored(self):
        columns = [{"columnId": "x", "label": 7, "propertyName": ["wd:Other"]}, {"columnId": "c", "label": "Course"}]
        assert resolve_column(columns, "Course", COURSE_PROPERTY_NAME) == "c"

    def test_unresolved(self):
        columns = [{"columnId": "a", "label": "Units"}, {"columnId": "b", "propertyName": "wd:Other"}]
        assert resolve_column(columns, "Course", COURSE_PROPERTY_NAME) is None

    @pytest.mark.parametrize("columns", [None, []])
    def test_absent_columns(self, columns):
        assert resolve_column(columns, "Course", COURSE_PROPERTY_NAME) is None

    @pytest.mark.parametrize("column_id", [None, ""])
    def test_column_without_id_is_unresolved(self, column_id):
        columns = [{"columnId": column_id, "label": "Course"}]
        assert resolve_column(columns, "Course", COURSE_PROPERTY_NAME) is None

    def test_resolve_grid_columns(self):
        grid = Node.wrap({"widget": "grid", "columns": [
            {"columnId": "g", "propertyName": GRADE_PROPERTY_NAME},
            {"columnId": "c", "label": "Course"},
        ]})
        assert resolve_grid_columns(grid) == ("c", "g")

    def test_ids_follow_each_load(self, build):
        """Two loads with the same schema but regenerated ids resolve independently."""
        first = Node.wrap(build.grid([], build.columns("c1", "c2")))
        second = Node.wrap(build.grid([], build.columns("k7", "k8")))
        assert resolve_grid_columns(first) == ("c1", "c2")
        assert resolve_grid_columns(second) == ("k7", "k8")


class TestCellText:
    """Test reading display text from a cell."""

    def test_first_instance_only(self):
        row = Row.wrap({"cellsMap": {"c1": {"instances": [{"text": "first"}, {"text": "second"}]}}})
        assert cell_text(row, "c1") == "first"

    def test_numeric_id_matches_string_key(self):
        row = Row.wrap({"cellsMap": {"1": {"instances": [{"text": "CS 101"}]}}})
        assert cell_text(row, 1) == "CS 101"

    @pytest.mark.parametrize("raw", [
        {},
        {"cellsMap": None},
        {"cellsMap": {}},
        {"cellsMap": {"c1": None}},
        {"cellsMap": {"c1": {}}},
        {"cellsMap": {"c1": {"instances": []}}},
        {"cellsMap": {"c1": {"instances": [{}]}}},
    ])
    def test_absent_text(self, raw):
        assert cell_text(Row.wrap(raw), "c1") is None


class TestDecodeRow:
    """Test row decoding into records."""

    def test_complete_row(self, build):
        assert decode_row(build.row("CS 101", "A"), "c1", "c2") == GradeRecord(course="CS 101", grade="A")

    @pytest.mark.parametrize("course", [None, ""])
    def test_row_without_course_dropped(self, build, course):
        assert decode_row(build.row(course, "B"), "c1", "c2") is None

    @pytest.mark.parametrize("grade", [None, ""])
    def test_missing_grade_defaults(self, build, grade):
        assert decode_row(build.row("MATH 201", grade), "c1", "c2").grade == "N/A"

    def test_grade_passed_through(self, build):
        assert decode_row(build.row("HIST 110", "IP"), "c1", "c2").grade == "IP"
        assert decode_row(build.row("HIST 110", "N/A"), "c1", "c2").grade == "N/A"

    def test_null_row(self):
        assert decode_row(None, "c1", "c2") is None
