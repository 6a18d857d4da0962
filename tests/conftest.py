"""
Shared fixtures: builders for synthetic Workday report trees.
"""

import pytest

from config import COURSEWORK_PROPERTY_NAME


class TreeBuilder:
    """Builds the nested report shape one level at a time."""

    @staticmethod
    def row(course=None, grade=None, course_id="c1", grade_id="c2"):
        cells = {}
        if course is not None:
            cells[course_id] = {"instances": [{"text": course}]}
        if grade is not None:
            cells[grade_id] = {"instances": [{"text": grade}]}
        return {"cellsMap": cells}

    @staticmethod
    def columns(course_id="c1", grade_id="c2"):
        return [
            {"columnId": course_id, "label": "Course"},
            {"columnId": grade_id, "label": "Grade"},
        ]

    @staticmethod
    def grid(rows, columns=None):
        return {
            "widget": "grid",
            "label": "Enrollments",
            "columns": columns if columns is not None else TreeBuilder.columns(),
            "rows": rows,
        }

    @staticmethod
    def semester(label, grid):
        return {"widget": "panel", "children": [
            {"widget": "fieldSet", "label": label, "children": [{"widget": "text", "label": "GPA"}, grid]}
        ]}

    @staticmethod
    def coursework(semesters, by_property_name=False):
        node = {"widget": "panelList", "panels": semesters}
        if by_property_name:
            node["propertyName"] = COURSEWORK_PROPERTY_NAME
        else:
            node["label"] = "Coursework"
        return node

    @staticmethod
    def active_record(coursework, nested=False):
        if nested:
            return {"children": [{"widget": "fieldSet", "children": [coursework]}]}
        return {"children": [{"widget": "text", "label": "Program"}, coursework]}

    @staticmethod
    def document(active_records):
        return {"body": {"children": [{"children": [{"widget": "panelList", "panels": active_records}]}]}}

    @classmethod
    def single_grid_document(cls, rows, term="Fall Semester 2025", columns=None, nested=False):
        semester = cls.semester(f"{term} (08/25/2025 - 12/12/2025)", cls.grid(rows, columns))
        return cls.document([cls.active_record(cls.coursework([semester]), nested=nested)])


@pytest.fixture
def build():
    return TreeBuilder


@pytest.fixture
def scenario_rows(build):
    """Rows from the documented scenario: one valid, one without course, one without grade."""
    return [
        build.row("CS 101", "A"),
        build.row("", "B"),
        build.row("MATH 201"),
    ]
