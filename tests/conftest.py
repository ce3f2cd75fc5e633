"""
Pytest Fixtures
===============

Shared fixtures for GraphQL observer tests.
"""

import sys
from pathlib import Path

import pytest

# Add src and the project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent.parent))

from api.posts import PostDao
from api.schema import build_posts_schema
from graphql_observer.engine import ObservedExecutor
from graphql_observer.models import (
    ErrorKind,
    ObservedError,
    OperationContext,
    OperationType,
    PlainValue,
    SelectionNode,
)
from graphql_observer.observer import OperationObserver
from graphql_observer.secure import SecureValue
from graphql_observer.sinks import RecordingSink
from tests.builders import field


@pytest.fixture
def sink() -> RecordingSink:
    """Create an empty recording sink."""
    return RecordingSink()


@pytest.fixture
def observer(sink: RecordingSink) -> OperationObserver:
    """Create an observer with default configuration."""
    return OperationObserver(sink)


@pytest.fixture
def noticing_observer(sink: RecordingSink) -> OperationObserver:
    """Create an observer that notices errors."""
    return OperationObserver.with_error_notices(sink, True)


@pytest.fixture
def eliding_observer(sink: RecordingSink) -> OperationObserver:
    """Create an observer that elides secure values keeping 4 characters."""
    return OperationObserver.with_secure_elision(sink, False, True)


@pytest.fixture
def mixed_selections() -> list[SelectionNode]:
    """Selections for ``{ zebra user { id name __typename } __typename }``."""
    return [
        field("zebra"),
        field("user", field("id"), field("name"), field("__typename")),
        field("__typename"),
    ]


@pytest.fixture
def mixed_context(mixed_selections: list[SelectionNode]) -> OperationContext:
    """Query context over the mixed selections."""
    return OperationContext(operation_type=OperationType.QUERY, selections=mixed_selections)


@pytest.fixture
def secure_variables() -> dict:
    """Variables with one plain and one secure value."""
    return {
        "name": PlainValue("Alice"),
        "token": SecureValue("secret123"),
    }


@pytest.fixture
def validation_error() -> ObservedError:
    """An error produced by query validation."""
    return ObservedError(message="Cannot query field 'nope' on type 'Query'.", kind=ErrorKind.VALIDATION)


@pytest.fixture
def posts_dao() -> PostDao:
    """Create a post store with the sample data."""
    return PostDao()


@pytest.fixture
def executor(posts_dao: PostDao, noticing_observer: OperationObserver) -> ObservedExecutor:
    """Create an executor over the posts schema that notices errors."""
    return ObservedExecutor(build_posts_schema(posts_dao), noticing_observer)
