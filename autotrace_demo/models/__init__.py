"""Pydantic models for span transcripts."""

from .spans import (
    ResourceRecord,
    SpanContextRecord,
    SpanRecord,
    SpanStatusRecord,
)

__all__ = [
    "ResourceRecord",
    "SpanContextRecord",
    "SpanRecord",
    "SpanStatusRecord",
]
