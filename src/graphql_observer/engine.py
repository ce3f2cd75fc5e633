"""
GraphQL Engine Boundary
=======================

Runs operations through graphql-core and converts its AST, variables and
errors into observer types, calling the observer hooks around execution.
"""

from inspect import isawaitable
from typing import Any, Iterable, Optional

import structlog
from graphql import (
    FieldNode,
    FragmentSpreadNode,
    GraphQLError,
    GraphQLSchema,
    GraphQLSyntaxError,
    InlineFragmentNode,
    NamedTypeNode,
    OperationDefinitionNode,
    SelectionSetNode,
    execute,
    get_operation_ast,
    parse,
    validate,
)
from graphql.execution.values import get_variable_values

from graphql_observer.models import (
    BoundValue,
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
from graphql_observer.observer import OperationObserver
from graphql_observer.secure import SecureValue

logger = structlog.get_logger(__name__)

SECURE_SCALAR_NAME = "SecureString"

SECURE_SCALAR_NAMES = frozenset({SECURE_SCALAR_NAME})


def selections_from_ast(selection_set: Optional[SelectionSetNode]) -> list[SelectionNode]:
    """Convert a graphql-core selection set into library-free selection nodes."""
    if selection_set is None:
        return []

    nodes = []
    for selection in selection_set.selections:
        if isinstance(selection, FieldNode):
            nodes.append(
                SelectionNode(
                    name=selection.name.value,
                    selections=selections_from_ast(selection.selection_set),
                )
            )
        elif isinstance(selection, FragmentSpreadNode):
            nodes.append(SelectionNode(name=selection.name.value, kind=SelectionKind.FRAGMENT_SPREAD))
        elif isinstance(selection, InlineFragmentNode):
            type_name = selection.type_condition.name.value if selection.type_condition else ""
            nodes.append(
                SelectionNode(
                    name=type_name,
                    selections=selections_from_ast(selection.selection_set),
                    kind=SelectionKind.INLINE_FRAGMENT,
                )
            )
    return nodes


def bind_variables(
    operation: OperationDefinitionNode,
    values: dict[str, Any],
    secure_scalars: Iterable[str] = SECURE_SCALAR_NAMES,
) -> dict[str, BoundValue]:
    """
    Tag coerced variable values as plain or secure.

    A variable is secure when its declared type, after unwrapping lists and
    non-null, is one of ``secure_scalars``.
    """
    secure_scalars = frozenset(secure_scalars)
    bound: dict[str, BoundValue] = {}
    for definition in operation.variable_definitions or ():
        name = definition.variable.name.value
        if name not in values:
            continue
        if _named_type(definition.type) in secure_scalars:
            bound[name] = SecureValue(values[name])
        else:
            bound[name] = PlainValue(values[name])
    return bound


def _named_type(type_node) -> str:
    while not isinstance(type_node, NamedTypeNode):
        type_node = type_node.type
    return type_node.name.value


def classify_error(error: GraphQLError) -> ErrorKind:
    """
    Classify an error by where it was produced.

    Errors located on a result path come from a resolver; syntax errors come
    from the parser. Anything else is reported as OTHER.
    """
    if isinstance(error, GraphQLSyntaxError):
        return ErrorKind.SYNTAX
    if error.path is not None:
        return ErrorKind.FIELD_RESOLUTION
    return ErrorKind.OTHER


def to_observed_error(error: GraphQLError, kind: Optional[ErrorKind] = None) -> ObservedError:
    return ObservedError(
        message=error.message,
        kind=kind or classify_error(error),
        path=list(error.path) if error.path is not None else None,
    )


class ObservedExecutor:
    """
    Executes GraphQL operations against a schema with observer hooks.

    Parse, validation and variable errors skip the pre-execution hook but are
    still passed through the post-execution hook.
    """

    def __init__(
        self,
        schema: GraphQLSchema,
        observer: OperationObserver,
        root_value: Any = None,
        secure_scalars: Iterable[str] = SECURE_SCALAR_NAMES,
    ) -> None:
        self.schema = schema
        self.observer = observer
        self.root_value = root_value
        self.secure_scalars = frozenset(secure_scalars)

    async def execute(
        self,
        query: str,
        variables: Optional[dict[str, Any]] = None,
        operation_name: Optional[str] = None,
        context_value: Any = None,
    ) -> ObservedResult:
        """
        Parse, validate and execute an operation.

        Args:
            query: Raw GraphQL document
            variables: Raw variable values
            operation_name: Operation to run when the document has several
            context_value: Passed through to resolvers as ``info.context``

        Returns:
            ObservedResult with data and classified errors
        """
        parameters = ExecutionParameters(
            query=query,
            operation_name=operation_name,
            variables=variables or {},
        )

        try:
            document = parse(query)
        except GraphQLError as error:
            logger.info("GraphQL syntax error", error=error.message)
            return await self._finish([to_observed_error(error, ErrorKind.SYNTAX)], parameters)

        validation_errors = validate(self.schema, document)
        if validation_errors:
            logger.info("GraphQL validation failed", error_count=len(validation_errors))
            return await self._finish(
                [to_observed_error(e, ErrorKind.VALIDATION) for e in validation_errors],
                parameters,
            )

        operation = get_operation_ast(document, operation_name)
        if operation is None:
            message = (
                f"Unknown operation named '{operation_name}'."
                if operation_name
                else "Must provide operation name if query contains multiple operations."
            )
            return await self._finish([ObservedError(message=message, kind=ErrorKind.OTHER)], parameters)

        coerced = get_variable_values(
            self.schema, operation.variable_definitions or (), parameters.variables
        )
        if isinstance(coerced, list):
            return await self._finish(
                [to_observed_error(e, ErrorKind.OTHER) for e in coerced],
                parameters,
            )

        context = OperationContext(
            operation_type=OperationType(operation.operation.value),
            selections=selections_from_ast(operation.selection_set),
            variables=bind_variables(operation, coerced, self.secure_scalars),
        )
        self.observer.instrument_execution_context(context, parameters)

        raw_result = execute(
            self.schema,
            document,
            root_value=self.root_value,
            context_value=context_value,
            variable_values=parameters.variables,
            operation_name=operation_name,
        )
        if isawaitable(raw_result):
            raw_result = await raw_result

        result = ObservedResult(
            data=raw_result.data,
            errors=[to_observed_error(e) for e in raw_result.errors or ()],
        )
        return await self.observer.instrument_execution_result(result, parameters)

    async def _finish(self, errors: list[ObservedError], parameters: ExecutionParameters) -> ObservedResult:
        return await self.observer.instrument_execution_result(
            ObservedResult(data=None, errors=errors), parameters
        )
