"""
Posts Data Access
=================

In-memory store for the posts/authors demo schema.
"""

import threading
import uuid
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class Author:
    """Author of one or more posts."""

    id: str
    name: str
    thumbnail: Optional[str] = None


@dataclass
class Post:
    """A blog post."""

    id: str
    title: str
    text: str
    category: Optional[str]
    author_id: str


@dataclass
class Book:
    """A book, as returned by the books query."""

    title: str
    author: str


@dataclass
class Session:
    """Authenticated session issued by the sign-in mutation."""

    token: str
    user: Author


SAMPLE_AUTHORS = [
    Author(id="author-1", name="Ada Lovelace", thumbnail="https://example.com/ada.png"),
    Author(id="author-2", name="Alan Turing"),
]

SAMPLE_POSTS = [
    Post(id=f"post-{i}", title=f"Post {i}", text=f"Body of post {i}", category="tech" if i % 2 else None,
         author_id=SAMPLE_AUTHORS[i % 2].id)
    for i in range(1, 11)
]

SAMPLE_BOOKS = [
    Book(title="Harry Potter and the Philosopher's Stone", author="J. K. Rowling"),
    Book(title="Moby Dick", author="Herman Melville"),
    Book(title="Interview with the vampire", author="Anne Rice"),
]


class PostDao:
    """
    Thread-safe in-memory post store.

    Posts are kept newest first.
    """

    def __init__(
        self,
        posts: list[Post] | None = None,
        authors: list[Author] | None = None,
        books: list[Book] | None = None,
    ) -> None:
        self._lock = threading.Lock()
        self._posts = list(reversed(posts if posts is not None else SAMPLE_POSTS))
        self._authors = {a.id: a for a in (authors if authors is not None else SAMPLE_AUTHORS)}
        self._books = list(books if books is not None else SAMPLE_BOOKS)
        self._credentials = {a.name.split()[0].lower(): "password" for a in self._authors.values()}

    def get_recent_posts(self, count: int, offset: int) -> list[Post]:
        """Return up to ``count`` posts, skipping the ``offset`` most recent."""
        if count < 0 or offset < 0:
            raise ValueError("count and offset must be non-negative")
        with self._lock:
            return self._posts[offset:offset + count]

    def get_posts_by_author(self, author_id: str) -> list[Post]:
        with self._lock:
            return [p for p in self._posts if p.author_id == author_id]

    def get_author(self, author_id: str) -> Optional[Author]:
        return self._authors.get(author_id)

    def get_authors(self) -> list[Author]:
        return list(self._authors.values())

    def get_books(self) -> list[Book]:
        return list(self._books)

    def save_post(self, title: str, text: str, category: Optional[str], author_id: str) -> Post:
        """
        Store a new post as the most recent one.

        Raises:
            KeyError: If the author does not exist
        """
        if author_id not in self._authors:
            raise KeyError(f"Unknown author: {author_id}")
        post = Post(id=str(uuid.uuid4()), title=title, text=text, category=category, author_id=author_id)
        with self._lock:
            self._posts.insert(0, post)
        return post

    def sign_in(self, username: str, password: str) -> Optional[Session]:
        """Return a session for valid credentials, None otherwise."""
        if self._credentials.get(username.lower()) != password:
            return None
        author = next(a for a in self._authors.values() if a.name.split()[0].lower() == username.lower())
        return Session(token=uuid.uuid4().hex, user=author)
