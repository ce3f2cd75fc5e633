"""Selection builders shared by the test modules."""

from graphql_observer.models import SelectionNode


def field(name: str, *children: SelectionNode) -> SelectionNode:
    """Build a field selection."""
    return SelectionNode(name=name, selections=list(children))
