"""
Data Models
===========

Core data structures for GraphQL operation observation.

These types are independent of any GraphQL library AST so that the
signature and sanitization logic can be tested on plain values.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

from graphql_observer.secure import SecureValue


class OperationType(Enum):
    """Kind of GraphQL operation."""

    QUERY = "query"
    MUTATION = "mutation"
    SUBSCRIPTION = "subscription"

    def __str__(self) -> str:
        return self.name


class SelectionKind(Enum):
    """Kind of a selection inside a selection set."""

    FIELD = "field"
    FRAGMENT_SPREAD = "fragment_spread"
    INLINE_FRAGMENT = "inline_fragment"


class ErrorKind(Enum):
    """Where in the request lifecycle an error was produced."""

    FIELD_RESOLUTION = "field_resolution"
    VALIDATION = "validation"
    SYNTAX = "syntax"
    OTHER = "other"


@dataclass
class SelectionNode:
    """A single selection with its ordered child selections."""

    name: str
    selections: list["SelectionNode"] = field(default_factory=list)
    kind: SelectionKind = SelectionKind.FIELD

    @property
    def is_field(self) -> bool:
        return self.kind == SelectionKind.FIELD


@dataclass(frozen=True)
class PlainValue:
    """A bound variable value with no redaction requirement."""

    value: Any

    def __str__(self) -> str:
        return "null" if self.value is None else str(self.value)


BoundValue = Union[PlainValue, SecureValue]


@dataclass
class OperationContext:
    """Parsed operation handed to the observer before field resolution."""

    operation_type: OperationType
    selections: list[SelectionNode]
    variables: dict[str, BoundValue] = field(default_factory=dict)


@dataclass
class ExecutionParameters:
    """Original request parameters."""

    query: str
    operation_name: Optional[str] = None
    variables: dict[str, Any] = field(default_factory=dict)


@dataclass
class ObservedError:
    """An error carried by an execution result."""

    message: str
    kind: ErrorKind = ErrorKind.OTHER
    path: Optional[list[Union[str, int]]] = None

    def __str__(self) -> str:
        if self.path:
            path = ".".join(str(p) for p in self.path)
            return f"{self.kind.value}: {self.message} (path: {path})"
        return f"{self.kind.value}: {self.message}"


@dataclass
class ObservedResult:
    """Final execution result."""

    data: Optional[dict[str, Any]] = None
    errors: list[ObservedError] = field(default_factory=list)

    def to_response(self) -> dict[str, Any]:
        """Render the result as a GraphQL response body."""
        response: dict[str, Any] = {"data": self.data}
        if self.errors:
            response["errors"] = [
                {"message": e.message, "path": e.path} if e.path else {"message": e.message}
                for e in self.errors
            ]
        return response
