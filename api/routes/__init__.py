"""API Routes."""

from api.routes.books import router as books_router
from api.routes.graphql import router as graphql_router
from api.routes.health import router as health_router

__all__ = ["books_router", "graphql_router", "health_router"]
