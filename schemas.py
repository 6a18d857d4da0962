# schemas.py

from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, AliasChoices
from typing import Any, Dict, List, Optional


def as_list(value: Any, name: str) -> List[Any]:
    """An absent container reads as empty. Anything other than a list is a shape violation."""
    if value is None:
        return []
    if not isinstance(value, list):
        raise TypeError(f"expected '{name}' to be a list, got {type(value).__name__}")
    return value


class TreeModel(BaseModel):
    """Base for views over the raw document tree: every field optional, unknown keys ignored."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    @classmethod
    def wrap(cls, raw: Any):
        """
        Validates a single level of the raw tree. Nested containers stay raw,
        so only the branches that are actually visited get validated.
        Returns None for an absent node.
        """
        if raw is None:
            return None
        if isinstance(raw, cls):
            return raw
        return cls.model_validate(raw)


class Node(TreeModel):
    """
    A tagged element of the rendered report tree.
    Fields are left untyped: siblings are only compared, never trusted,
    and containers are checked with `as_list` where they are iterated.
    """
    widget: Any = None
    label: Any = None
    property_name: Any = Field(default=None, alias="propertyName")
    children: Any = None
    panels: Any = None
    columns: Any = None
    rows: Any = None


class Column(TreeModel):
    column_id: Any = Field(default=None, validation_alias=AliasChoices("columnId", "id", "column_id"))
    label: Any = None
    property_name: Any = Field(default=None, alias="propertyName")


class Instance(TreeModel):
    text: Optional[str] = None


class Cell(TreeModel):
    instances: Optional[List[Any]] = None


class Row(TreeModel):
    """A grid row; cells are keyed by the column id of the current load."""
    cells_map: Optional[Dict[Any, Any]] = Field(default=None, alias="cellsMap")


class GradeRecord(BaseModel):
    course: str
    grade: str


class ExtractionResult(BaseModel):
    """Records extracted from one document. `error` is set when the traversal stopped early."""
    records: List[GradeRecord] = Field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ScrapeStatus(BaseModel):
    """Defines the schema for the polling service's status response."""
    status: str
    details: str
    term: str
    runs_completed: int = 0
    last_run_at: Optional[datetime] = None
    last_record_count: int = 0
    last_error: Optional[str] = None
