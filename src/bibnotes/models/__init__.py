"""Pydantic models used across the project."""

from __future__ import annotations

from bibnotes.models.tree import DocumentStats, Node, document_stats

__all__ = [
    "DocumentStats",
    "Node",
    "document_stats",
]
