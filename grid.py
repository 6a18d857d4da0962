# grid.py

from typing import Any, List, Optional, Tuple

from config import (
    COURSE_COLUMN_LABEL, COURSE_PROPERTY_NAME, GRADE_COLUMN_LABEL, GRADE_PROPERTY_NAME, MISSING_GRADE
)
from locator import first_success
from schemas import Cell, Column, GradeRecord, Instance, Node, Row, as_list


def _has_id(column: Column) -> bool:
    return column.column_id is not None and column.column_id != ""

def _find_column(columns: Optional[List[Any]], **match) -> Optional[Column]:
    for raw in as_list(columns, "columns"):
        column = Column.wrap(raw)
        if column is None:
            continue
        if all(getattr(column, attr) == value for attr, value in match.items()):
            return column
    return None

def resolve_column(columns: Optional[List[Any]], semantic_name: str, known_property_name: str):
    """
    Resolves a column to the id used by the current load.
    A label match anywhere in the grid wins over a property name match.
    Ids change on every load, so this must run for every document.
    """
    column = first_success([
        lambda: _find_column(columns, label=semantic_name),
        lambda: _find_column(columns, property_name=known_property_name),
    ])
    if column is None or not _has_id(column):
        return None
    return column.column_id

def resolve_grid_columns(grid: Node) -> Tuple[Optional[Any], Optional[Any]]:
    course_id = resolve_column(grid.columns, COURSE_COLUMN_LABEL, COURSE_PROPERTY_NAME)
    grade_id = resolve_column(grid.columns, GRADE_COLUMN_LABEL, GRADE_PROPERTY_NAME)
    return course_id, grade_id


def _lookup_cell(cells: dict, col_id: Any) -> Optional[Any]:
    # JSON object keys are always strings, ids may not be.
    if col_id in cells:
        return cells[col_id]
    return cells.get(str(col_id))

def cell_text(row: Row, col_id: Any) -> Optional[str]:
    """Display text of the first instance in the cell for `col_id`, or None."""
    if not row.cells_map:
        return None
    cell = Cell.wrap(_lookup_cell(row.cells_map, col_id))
    if cell is None or not cell.instances:
        return None
    instance = Instance.wrap(cell.instances[0])
    if instance is None:
        return None
    return instance.text

def decode_row(raw_row: Any, course_col_id: Any, grade_col_id: Any) -> Optional[GradeRecord]:
    row = Row.wrap(raw_row)
    if row is None:
        return None
    course = cell_text(row, course_col_id)
    if not course:
        return None
    grade = cell_text(row, grade_col_id) or MISSING_GRADE
    return GradeRecord(course=course, grade=grade)
