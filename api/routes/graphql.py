"""
GraphQL Routes
==============

Endpoint executing operations against the posts schema.
"""

import time

from fastapi import APIRouter, Depends, Request

from api.schemas import ErrorResponse, GraphQLRequest, GraphQLResponse
from graphql_observer.engine import ObservedExecutor
from observability.metrics import track_graphql_execution

router = APIRouter(tags=["GraphQL"])


def get_executor(request: Request) -> ObservedExecutor:
    """Dependency to get the observed executor from app state."""
    return request.app.state.executor


@router.post(
    "/graphql",
    response_model=GraphQLResponse,
    response_model_exclude_none=True,
    responses={
        422: {"description": "Malformed request body"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Execute a GraphQL operation",
    description="Runs a query or mutation against the posts schema",
)
async def execute_graphql(
    body: GraphQLRequest,
    executor: ObservedExecutor = Depends(get_executor),
) -> GraphQLResponse:
    """
    Execute a GraphQL operation.

    Parse, validation and resolver errors are returned in ``errors`` with
    status 200, as GraphQL clients expect.
    """
    start_time = time.perf_counter()

    result = await executor.execute(
        body.query,
        variables=body.variables,
        operation_name=body.operation_name,
    )

    track_graphql_execution(len(result.errors), time.perf_counter() - start_time)
    return GraphQLResponse.model_validate(result.to_response())
