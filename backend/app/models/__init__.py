"""Pydantic models for API payloads."""

from .inventory import EntrySubmission

__all__ = ["EntrySubmission"]
