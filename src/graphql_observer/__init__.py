"""
GraphQL Operation Observer
==========================

Observability hooks for GraphQL execution: transaction naming from the
requested fields, per-field counters, request metadata and error notices.
"""

from graphql_observer.models import (
    ErrorKind,
    ExecutionParameters,
    ObservedError,
    ObservedResult,
    OperationContext,
    OperationType,
    PlainValue,
    SelectionKind,
    SelectionNode,
)
from graphql_observer.secure import SecureValue, fixed_elision
from graphql_observer.signature import STITCH_POINTS, extract_signature
from graphql_observer.observer import OperationObserver
from graphql_observer.engine import ObservedExecutor, bind_variables, classify_error, selections_from_ast
from graphql_observer.sinks import (
    CompositeSink,
    OpenTelemetrySink,
    PrometheusSink,
    RecordingSink,
    StructlogSink,
    TelemetrySink,
)

__version__ = "0.1.0"

__all__ = [
    # Models
    "OperationType",
    "SelectionKind",
    "SelectionNode",
    "OperationContext",
    "ExecutionParameters",
    "ErrorKind",
    "ObservedError",
    "ObservedResult",
    "PlainValue",
    "SecureValue",
    "fixed_elision",
    # Signature
    "STITCH_POINTS",
    "extract_signature",
    # Observer
    "OperationObserver",
    "ObservedExecutor",
    "bind_variables",
    "classify_error",
    "selections_from_ast",
    # Sinks
    "TelemetrySink",
    "CompositeSink",
    "RecordingSink",
    "OpenTelemetrySink",
    "PrometheusSink",
    "StructlogSink",
]
