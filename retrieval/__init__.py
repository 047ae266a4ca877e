"""
Retrieval package for catalog lookups.

Components:
- query_service: List categories, list a category's articles, fetch one article
"""

from .query_service import QueryService

__all__ = ['QueryService']
