"""Upstream quote sources."""

from .quotable_client import QuotableQuoteFetcher

__all__ = ["QuotableQuoteFetcher"]
