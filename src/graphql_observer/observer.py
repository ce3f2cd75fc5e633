"""
Operation Observer
==================

Hooks around GraphQL execution that name the transaction after the
requested fields and attach request metadata to telemetry.
"""

from typing import Optional, Union

import structlog

from graphql_observer.models import (
    BoundValue,
    ErrorKind,
    ExecutionParameters,
    ObservedResult,
    OperationContext,
)
from graphql_observer.secure import (
    DEFAULT_ELISION_KEEP_CHAR_COUNT,
    ElisionPolicy,
    SecureValue,
    fixed_elision,
)
from graphql_observer.signature import STITCH_POINTS, extract_signature
from graphql_observer.sinks.base import TelemetrySink

logger = structlog.get_logger(__name__)

CATEGORY = "GraphQL"
METRIC_COUNT = "Custom/GraphQL/CallCount/Operations/{}"
GRAPHQL_FIELDS_PARAM = "graphQL.fields"
GRAPHQL_VARIABLES_PARAM = "variables.{}"
QUERY_PARAM = "query"
OPERATION_NAME_PARAM = "operationName"


class OperationObserver:
    """
    Reports GraphQL operations to a telemetry sink.

    The observer keeps no per-request state; configuration is fixed at
    construction and every hook call reads only its own arguments.
    """

    def __init__(
        self,
        sink: TelemetrySink,
        notice_errors: bool = False,
        elide_secure_values: bool = False,
        elision_char_count: Union[int, ElisionPolicy, None] = None,
        stitch_points: frozenset[str] = STITCH_POINTS,
    ) -> None:
        """
        Initialize the observer.

        Args:
            sink: Telemetry backend to report to
            notice_errors: Report errors raised outside field resolution
            elide_secure_values: Replace secure variables with their elided form
            elision_char_count: Characters to keep when eliding; an int or a
                per-value function. Defaults to 4 when elision is enabled.
            stitch_points: Top-level fields whose children name the operation
        """
        self._sink = sink
        self._notice_errors = notice_errors
        self._elide_secure_values = elide_secure_values
        self._stitch_points = frozenset(stitch_points)

        if elision_char_count is None:
            keep = DEFAULT_ELISION_KEEP_CHAR_COUNT if elide_secure_values else 0
            self._elision_policy = fixed_elision(keep)
        elif isinstance(elision_char_count, int):
            self._elision_policy = fixed_elision(elision_char_count)
        else:
            self._elision_policy = elision_char_count

    @classmethod
    def with_error_notices(cls, sink: TelemetrySink, notice_errors: bool) -> "OperationObserver":
        return cls(sink, notice_errors=notice_errors)

    @classmethod
    def with_secure_elision(
        cls, sink: TelemetrySink, notice_errors: bool, elide_secure_values: bool
    ) -> "OperationObserver":
        """Elide secure values keeping the default number of characters."""
        return cls(
            sink,
            notice_errors=notice_errors,
            elide_secure_values=elide_secure_values,
            elision_char_count=DEFAULT_ELISION_KEEP_CHAR_COUNT,
        )

    @classmethod
    def with_fixed_elision(
        cls, sink: TelemetrySink, notice_errors: bool, elide_secure_values: bool, keep_char_count: int
    ) -> "OperationObserver":
        return cls(
            sink,
            notice_errors=notice_errors,
            elide_secure_values=elide_secure_values,
            elision_char_count=keep_char_count,
        )

    @classmethod
    def with_elision_policy(
        cls, sink: TelemetrySink, notice_errors: bool, elide_secure_values: bool, policy: ElisionPolicy
    ) -> "OperationObserver":
        return cls(
            sink,
            notice_errors=notice_errors,
            elide_secure_values=elide_secure_values,
            elision_char_count=policy,
        )

    @property
    def notice_errors(self) -> bool:
        return self._notice_errors

    @property
    def elide_secure_values(self) -> bool:
        return self._elide_secure_values

    def instrument_execution_context(
        self,
        context: Optional[OperationContext],
        parameters: Optional[ExecutionParameters] = None,
    ) -> Optional[OperationContext]:
        """
        Pre-execution hook.

        Renames the transaction to ``GraphQL/<OPERATION>/<field>[::<field>...]``,
        counts each field and attaches the fields and variables as parameters.

        Args:
            context: Parsed operation, or None when parsing failed
            parameters: Original request parameters

        Returns:
            The context, unchanged
        """
        if context is None:
            return None

        fields = self.get_fields(context)

        self._sink.set_transaction_name(CATEGORY, f"{context.operation_type}/{'::'.join(fields)}")
        self._sink.add_custom_parameter(GRAPHQL_FIELDS_PARAM, "|".join(fields))
        for name in fields:
            self._sink.increment_counter(METRIC_COUNT.format(name))

        variables: dict[str, object] = dict(context.variables)
        if self._elide_secure_values:
            variables = self.sanitize_variables(context.variables)
        for name, value in variables.items():
            self._sink.add_custom_parameter(GRAPHQL_VARIABLES_PARAM.format(name), _to_string(value))

        return context

    async def instrument_execution_result(
        self,
        result: Optional[ObservedResult],
        parameters: ExecutionParameters,
    ) -> Optional[ObservedResult]:
        """
        Post-execution hook.

        Notices errors produced outside field resolution (when enabled) and
        attaches the raw query and operation name. Completes without
        suspending.
        """
        if result is None:
            return None

        self._notice_expected_errors(result)

        self._sink.add_custom_parameter(QUERY_PARAM, _to_string(parameters.query))
        self._sink.add_custom_parameter(OPERATION_NAME_PARAM, _to_string(parameters.operation_name))

        return result

    def get_fields(self, context: OperationContext) -> list[str]:
        """Return the operation signature for a context."""
        return extract_signature(context.selections, self._stitch_points)

    def sanitize_variables(self, variables: dict[str, BoundValue]) -> dict[str, object]:
        """Replace every secure value with its elided string."""
        sanitized: dict[str, object] = {}
        for name, value in variables.items():
            if isinstance(value, SecureValue):
                sanitized[name] = value.get_elided_value(self._elision_policy(value))
            else:
                sanitized[name] = value
        return sanitized

    def _notice_expected_errors(self, result: ObservedResult) -> None:
        # Field resolution errors are reported by the resolver instrumentation.
        if not self._notice_errors or not result.errors:
            return

        for error in result.errors:
            if error.kind == ErrorKind.FIELD_RESOLUTION:
                continue
            try:
                self._sink.notice_error(str(error), True)
            except Exception:
                logger.exception("Failed to notice GraphQL error", error_kind=error.kind.value)


def _to_string(value: object) -> str:
    # PlainValue and SecureValue render None as "null" themselves.
    return "null" if value is None else str(value)
