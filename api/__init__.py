"""
Posts GraphQL API
=================

FastAPI service exposing the posts/authors demo schema through the
observed GraphQL executor.
"""

__version__ = "0.1.0"
