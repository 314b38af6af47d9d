"""Query expansion for extensive searches."""

from .query_rewriter import QueryExpander, QueryRewriter, RewriteTemplate

__all__ = ["QueryExpander", "QueryRewriter", "RewriteTemplate"]
