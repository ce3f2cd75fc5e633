"""
Posts Schema
============

SDL and resolvers for the posts/authors demo schema.
"""

from graphql import GraphQLSchema, build_schema

from api.posts import Author, Post, PostDao

SCHEMA_SDL = """
scalar SecureString

type Post {
  id: ID!
  title: String!
  text: String!
  category: String
  author: Author!
}

type Author {
  id: ID!
  name: String!
  thumbnail: String
  posts: [Post!]!
}

type Book {
  title: String!
  author: String!
}

type Session {
  token: String!
  user: Author!
}

type Query {
  recentPosts(count: Int!, offset: Int!): [Post!]!
  authors: [Author!]!
  books: [Book!]!
  user(id: ID!): Author
}

type Mutation {
  writePost(title: String!, text: String!, category: String, authorId: ID!): Post!
  signIn(username: String!, password: SecureString!): Session
}
"""


def build_posts_schema(dao: PostDao) -> GraphQLSchema:
    """
    Build the executable schema backed by a post store.

    Args:
        dao: Store used by every resolver

    Returns:
        GraphQLSchema with resolvers attached
    """
    schema = build_schema(SCHEMA_SDL)

    query = schema.query_type.fields
    query["recentPosts"].resolve = lambda _, info, count, offset: dao.get_recent_posts(count, offset)
    query["authors"].resolve = lambda _, info: dao.get_authors()
    query["books"].resolve = lambda _, info: dao.get_books()
    query["user"].resolve = lambda _, info, id: dao.get_author(id)

    mutation = schema.mutation_type.fields
    mutation["writePost"].resolve = (
        lambda _, info, title, text, authorId, category=None: dao.save_post(title, text, category, authorId)
    )
    mutation["signIn"].resolve = lambda _, info, username, password: dao.sign_in(username, password)

    def resolve_post_author(post: Post, info) -> Author:
        author = dao.get_author(post.author_id)
        if author is None:
            raise LookupError(f"Author {post.author_id} not found")
        return author

    schema.type_map["Post"].fields["author"].resolve = resolve_post_author
    schema.type_map["Author"].fields["posts"].resolve = lambda author, info: dao.get_posts_by_author(author.id)

    return schema
