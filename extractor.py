# extractor.py

from typing import Any, Iterator, List

from pydantic import ValidationError

from grid import decode_row, resolve_grid_columns
from locator import find_child, is_enrollments_grid, is_field_set, locate_coursework
from schemas import ExtractionResult, GradeRecord, Node, as_list
from utils import dig

# A node with a different shape than the one being read. Anything else is a bug and propagates.
SHAPE_ERRORS = (ValidationError, TypeError, AttributeError, KeyError, IndexError)


def _semester_records(semester_panel: Any, term: str) -> Iterator[GradeRecord]:
    panel = Node.wrap(semester_panel)
    if panel is None:
        return
    field_set = find_child(panel.children, is_field_set)
    if field_set is None:
        return
    if term not in (field_set.label or ""):
        return

    grid = find_child(field_set.children, is_enrollments_grid)
    if grid is None:
        return
    course_id, grade_id = resolve_grid_columns(grid)
    if course_id is None or grade_id is None:
        return

    for raw_row in as_list(grid.rows, "rows"):
        record = decode_row(raw_row, course_id, grade_id)
        if record is not None:
            yield record

def _active_record_records(active_record: Any, term: str) -> Iterator[GradeRecord]:
    panel = Node.wrap(active_record)
    if panel is None:
        return
    coursework = locate_coursework(panel)
    if coursework is None:
        return
    for semester_panel in as_list(coursework.panels, "panels"):
        yield from _semester_records(semester_panel, term)

def iter_grade_records(tree: Any, term: str) -> Iterator[GradeRecord]:
    """
    Walks body -> institutional view -> active records list -> record panels
    -> Coursework panel list -> semester panels, yielding the grades of every
    semester whose label contains `term`, in document order.
    """
    active_records_list = Node.wrap(dig(tree, "body", "children", 0, "children", 0))
    if active_records_list is None:
        return
    for active_record in as_list(active_records_list.panels, "panels"):
        yield from _active_record_records(active_record, term)

def extract_grades(tree: Any, term: str) -> ExtractionResult:
    """
    Extracts course/grade records for `term`. Never raises on malformed input:
    the traversal stops at the first node it cannot read and the records
    gathered up to that point are returned alongside the error.
    """
    records: List[GradeRecord] = []
    try:
        for record in iter_grade_records(tree, term):
            records.append(record)
    except SHAPE_ERRORS as e:
        return ExtractionResult(records=records, error=f"{e.__class__.__name__}: {e}")
    return ExtractionResult(records=records)
