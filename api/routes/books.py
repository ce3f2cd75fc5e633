"""
Books Routes
============

Fetches books from a GraphQL endpoint over HTTP.
"""

import httpx
from fastapi import APIRouter, Depends, HTTPException, Request

from api.schemas import BookResponse, ErrorResponse
from observability.logging_config import get_logger

router = APIRouter(tags=["Books"])

logger = get_logger(__name__)

BOOKS_QUERY = """query GetBooks {
  books {
    title
    author
  }
}"""


def get_graphql_client(request: Request) -> httpx.AsyncClient:
    """Dependency to get the GraphQL HTTP client from app state."""
    return request.app.state.graphql_client


def get_graphql_endpoint(request: Request) -> str:
    """Dependency to get the configured GraphQL endpoint URL."""
    return request.app.state.graphql_endpoint


@router.get(
    "/query",
    response_model=list[BookResponse],
    responses={
        502: {"model": ErrorResponse, "description": "GraphQL endpoint failed"},
    },
    summary="List books",
    description="Runs the GetBooks query against the configured GraphQL endpoint",
)
async def query_books(
    client: httpx.AsyncClient = Depends(get_graphql_client),
    endpoint: str = Depends(get_graphql_endpoint),
) -> list[BookResponse]:
    """
    Fetch the list of books.

    Returns:
        Books from the first field of the response data
    """
    try:
        response = await client.post(endpoint, json={"query": BOOKS_QUERY, "operationName": "GetBooks"})
        response.raise_for_status()
    except httpx.HTTPError as e:
        logger.warning("GraphQL endpoint request failed", error=str(e))
        raise HTTPException(
            status_code=502,
            detail={"error": "UpstreamError", "message": str(e)},
        )

    payload = response.json()
    if payload.get("errors"):
        raise HTTPException(
            status_code=502,
            detail={"error": "GraphQLError", "message": payload["errors"][0].get("message", "")},
        )

    data = payload.get("data") or {}
    books = next(iter(data.values()), None) or []
    return [BookResponse.model_validate(book) for book in books]
