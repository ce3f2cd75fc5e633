"""
Unit Tests for the GraphQL Engine Boundary
==========================================

Tests for AST conversion, variable binding, error classification and
observed execution against the posts schema.
"""

import asyncio

from graphql import GraphQLError, parse

from api.schema import build_posts_schema
from graphql_observer.engine import (
    ObservedExecutor,
    bind_variables,
    classify_error,
    selections_from_ast,
)
from graphql_observer.models import ErrorKind, PlainValue, SelectionKind
from graphql_observer.observer import OperationObserver
from graphql_observer.secure import ELISION_MASK, SecureValue
from graphql_observer.sinks import RecordingSink

SIGN_IN = """
mutation SignIn($username: String!, $password: SecureString!) {
  signIn(username: $username, password: $password) {
    token
    user { name }
  }
}
"""


class TestSelectionsFromAst:
    """Tests for converting graphql-core selection sets."""

    def test_fields_and_children(self) -> None:
        document = parse("{ user(id: 1) { id name } books { title } }")
        selections = selections_from_ast(document.definitions[0].selection_set)

        assert [s.name for s in selections] == ["user", "books"]
        assert [s.name for s in selections[0].selections] == ["id", "name"]
        assert all(s.kind == SelectionKind.FIELD for s in selections)

    def test_field_name_not_alias(self) -> None:
        document = parse("{ latest: recentPosts(count: 1, offset: 0) { id } }")
        selections = selections_from_ast(document.definitions[0].selection_set)
        assert selections[0].name == "recentPosts"

    def test_fragments(self) -> None:
        document = parse("{ ...PostFields ... on Query { books { title } } }")
        selections = selections_from_ast(document.definitions[0].selection_set)

        assert selections[0].kind == SelectionKind.FRAGMENT_SPREAD
        assert selections[0].name == "PostFields"
        assert selections[1].kind == SelectionKind.INLINE_FRAGMENT
        assert selections[1].selections[0].name == "books"

    def test_none(self) -> None:
        assert selections_from_ast(None) == []


class TestBindVariables:
    """Tests for tagging variables as plain or secure."""

    def test_secure_scalar_wrapped(self) -> None:
        operation = parse(SIGN_IN).definitions[0]
        bound = bind_variables(operation, {"username": "ada", "password": "pw"})

        assert bound == {"username": PlainValue("ada"), "password": SecureValue("pw")}

    def test_wrapped_types_unwrapped(self) -> None:
        operation = parse("query Q($tokens: [SecureString!]) { books { title } }").definitions[0]
        bound = bind_variables(operation, {"tokens": ["a", "b"]})
        assert isinstance(bound["tokens"], SecureValue)

    def test_missing_values_skipped(self) -> None:
        operation = parse("query Q($category: String) { books { title } }").definitions[0]
        assert bind_variables(operation, {}) == {}

    def test_custom_secure_scalars(self) -> None:
        operation = parse("query Q($key: ApiKey!) { books { title } }").definitions[0]
        bound = bind_variables(operation, {"key": "k"}, secure_scalars={"ApiKey"})
        assert bound == {"key": SecureValue("k")}


class TestClassifyError:
    """Tests for error classification."""

    def test_located_error_is_field_resolution(self) -> None:
        error = GraphQLError("boom", path=["recentPosts"], original_error=ValueError("boom"))
        assert classify_error(error) == ErrorKind.FIELD_RESOLUTION

    def test_unlocated_error_is_other(self) -> None:
        assert classify_error(GraphQLError("bad variables")) == ErrorKind.OTHER


class TestObservedExecutor:
    """Tests for observed execution against the posts schema."""

    def test_query_success(self, executor: ObservedExecutor) -> None:
        result = asyncio.run(executor.execute("{ recentPosts(count: 2, offset: 0) { id title } }"))

        assert result.errors == []
        assert [p["id"] for p in result.data["recentPosts"]] == ["post-10", "post-9"]

    def test_transaction_named(self, executor: ObservedExecutor, sink: RecordingSink) -> None:
        asyncio.run(executor.execute('{ user(id: "author-1") { id name __typename } books { title } }'))

        assert sink.transaction_name == "GraphQL/QUERY/books::user.id::user.name"
        assert sink.parameters["graphQL.fields"] == "books|user.id|user.name"

    def test_top_level_typename_not_counted(self, executor: ObservedExecutor, sink: RecordingSink) -> None:
        asyncio.run(executor.execute("{ __typename books { title } }"))

        assert sink.transaction_name == "GraphQL/QUERY/books"
        assert list(sink.counters) == ["Custom/GraphQL/CallCount/Operations/books"]

    def test_query_and_operation_name_attached(self, executor: ObservedExecutor, sink: RecordingSink) -> None:
        query = "query GetBooks { books { title author } }"
        asyncio.run(executor.execute(query, operation_name="GetBooks"))

        assert sink.parameters["query"] == query
        assert sink.parameters["operationName"] == "GetBooks"

    def test_resolver_error_not_noticed(self, executor: ObservedExecutor, sink: RecordingSink) -> None:
        """Test that exceptions raised by resolvers are classified and not noticed."""
        result = asyncio.run(executor.execute("{ recentPosts(count: -1, offset: 0) { id } }"))

        assert len(result.errors) == 1
        assert result.errors[0].kind == ErrorKind.FIELD_RESOLUTION
        assert result.errors[0].path == ["recentPosts"]
        assert sink.errors == []
        assert sink.transaction_name == "GraphQL/QUERY/recentPosts"

    def test_validation_error_noticed(self, executor: ObservedExecutor, sink: RecordingSink) -> None:
        """Test that validation errors are noticed and skip the pre-hook."""
        result = asyncio.run(executor.execute("{ nope }"))

        assert result.data is None
        assert [e.kind for e in result.errors] == [ErrorKind.VALIDATION]
        assert len(sink.errors) == 1
        assert sink.errors[0].expected is True
        assert sink.transaction_names == []
        assert sink.parameters["query"] == "{ nope }"

    def test_syntax_error_noticed(self, executor: ObservedExecutor, sink: RecordingSink) -> None:
        result = asyncio.run(executor.execute("{ recentPosts("))

        assert [e.kind for e in result.errors] == [ErrorKind.SYNTAX]
        assert sink.errors[0].message.startswith("syntax:")

    def test_bad_variables_reported(self, executor: ObservedExecutor) -> None:
        query = "query Recent($count: Int!) { recentPosts(count: $count, offset: 0) { id } }"
        result = asyncio.run(executor.execute(query, variables={"count": "many"}))

        assert result.data is None
        assert [e.kind for e in result.errors] == [ErrorKind.OTHER]

    def test_unknown_operation_name(self, executor: ObservedExecutor) -> None:
        result = asyncio.run(executor.execute("query A { books { title } }", operation_name="B"))
        assert result.errors[0].message == "Unknown operation named 'B'."

    def test_fragment_only_operation(self, executor: ObservedExecutor, sink: RecordingSink) -> None:
        query = "query { ...BookFields } fragment BookFields on Query { books { title } }"
        result = asyncio.run(executor.execute(query))

        assert len(result.data["books"]) == 3
        assert sink.transaction_name == "GraphQL/QUERY/"

    def test_secure_variable_elided(self, posts_dao) -> None:
        """Test that SecureString variables are elided end to end."""
        sink = RecordingSink()
        observer = OperationObserver.with_secure_elision(sink, False, True)
        executor = ObservedExecutor(build_posts_schema(posts_dao), observer)

        result = asyncio.run(
            executor.execute(SIGN_IN, variables={"username": "ada", "password": "password"})
        )

        assert result.data["signIn"]["user"]["name"] == "Ada Lovelace"
        assert sink.transaction_name == "GraphQL/MUTATION/signIn"
        assert sink.parameters["variables.username"] == "ada"
        assert sink.parameters["variables.password"] == "pass" + ELISION_MASK

    def test_secure_variable_verbatim_without_elision(self, executor: ObservedExecutor, sink: RecordingSink) -> None:
        asyncio.run(executor.execute(SIGN_IN, variables={"username": "ada", "password": "password"}))
        assert sink.parameters["variables.password"] == "password"

    def test_mutation_writes_post(self, executor: ObservedExecutor) -> None:
        mutation = """
        mutation Write($title: String!, $text: String!, $author: ID!) {
          writePost(title: $title, text: $text, authorId: $author) { id author { name } }
        }
        """
        result = asyncio.run(
            executor.execute(mutation, variables={"title": "New", "text": "Body", "author": "author-2"})
        )
        assert result.data["writePost"]["author"]["name"] == "Alan Turing"

        recent = asyncio.run(executor.execute("{ recentPosts(count: 1, offset: 0) { title } }"))
        assert recent.data["recentPosts"] == [{"title": "New"}]
