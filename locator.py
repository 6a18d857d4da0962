# locator.py

from collections.abc import Mapping
from typing import Any, Callable, Iterable, List, Optional, Tuple

from config import (
    COURSEWORK_LABEL, COURSEWORK_PROPERTY_NAME, ENROLLMENTS_LABEL,
    WIDGET_PANEL_LIST, WIDGET_FIELD_SET, WIDGET_GRID
)
from schemas import Node, as_list

Predicate = Callable[[Node], bool]
Strategy = Callable[[], Optional[Any]]
FallbackPath = Tuple[Predicate, Predicate]


# --- Predicates ---

def widget_is(kind: str) -> Predicate:
    return lambda node: node.widget == kind

def is_field_set(node: Node) -> bool:
    return node.widget == WIDGET_FIELD_SET

def is_coursework_panel_list(node: Node) -> bool:
    """The Coursework panel list, matched by label or by its stable property name."""
    return node.widget == WIDGET_PANEL_LIST and (
        node.label == COURSEWORK_LABEL or node.property_name == COURSEWORK_PROPERTY_NAME
    )

def is_enrollments_grid(node: Node) -> bool:
    return node.widget == WIDGET_GRID and node.label == ENROLLMENTS_LABEL


# --- Search ---

def first_success(strategies: Iterable[Strategy]):
    """Evaluates strategies in order and returns the first result that is not None."""
    for strategy in strategies:
        result = strategy()
        if result is not None:
            return result
    return None

def find_child(children: Optional[List[Any]], predicate: Predicate) -> Optional[Node]:
    """One-level scan for the first child satisfying `predicate`. Absent children means not found."""
    for raw in as_list(children, "children"):
        # Non-object siblings have no widget and cannot match
        if not isinstance(raw, Mapping):
            continue
        node = Node.wrap(raw)
        if predicate(node):
            return node
    return None

def find_nested(children: Optional[List[Any]], outer: Predicate, inner: Predicate) -> Optional[Node]:
    """Finds the first child matching `outer`, then searches its children with `inner`."""
    container = find_child(children, outer)
    if container is None:
        return None
    return find_child(container.children, inner)

def locate(
    children: Optional[List[Any]],
    primary: Predicate,
    fallback_path: Optional[FallbackPath] = None,
) -> Optional[Node]:
    strategies: List[Strategy] = [lambda: find_child(children, primary)]
    if fallback_path is not None:
        outer, inner = fallback_path
        strategies.append(lambda: find_nested(children, outer, inner))
    return first_success(strategies)

def locate_coursework(active_record: Node) -> Optional[Node]:
    """The Coursework panel list is either a direct child of the record panel or nested in a fieldSet."""
    return locate(
        active_record.children,
        is_coursework_panel_list,
        fallback_path=(is_field_set, is_coursework_panel_list),
    )
