"""LCA Insight backend package."""

__all__ = []
