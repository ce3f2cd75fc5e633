"""
Operation Signature
===================

Best-effort extraction of a stable name for an operation from its
top-level selections.

Common stitch points ("actor", "account", "user", ...) carry no meaning on
their own, so their sub fields are used instead. Everything else is named
by the top-level field only; deeper schemas may collapse to the same name.
"""

from typing import Iterable, Iterator

from graphql_observer.models import SelectionNode

STITCH_POINTS = frozenset({"actor", "account", "currentUser", "user", "docs", "nrPlatform"})

TYPENAME_FIELD = "__typename"


def extract_signature(
    selections: Iterable[SelectionNode],
    stitch_points: frozenset[str] = STITCH_POINTS,
) -> list[str]:
    """
    Return the sorted list of field names requested by an operation.

    Args:
        selections: Root selections of the operation
        stitch_points: Top-level field names to expand into their children

    Returns:
        Field names in ascending order, e.g. ``["user.id", "zebra"]``
    """
    names = []
    for top_field in _fields(selections):
        names.extend(_expand(top_field, stitch_points))
    return sorted(names)


def _expand(top_field: SelectionNode, stitch_points: frozenset[str]) -> Iterator[str]:
    if top_field.name not in stitch_points:
        yield top_field.name
        return

    for sub_field in _fields(top_field.selections):
        yield f"{top_field.name}.{sub_field.name}"


def _fields(selections: Iterable[SelectionNode]) -> Iterator[SelectionNode]:
    # Fragment spreads and inline fragments are skipped, not resolved.
    # __typename is introspection and never names an operation.
    return (
        selection
        for selection in selections
        if selection.is_field and selection.name != TYPENAME_FIELD
    )
