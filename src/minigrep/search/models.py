"""Typed models for line search results."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class SearchHit:
    """A matching line and its 1-based position in the corpus."""

    line_number: int
    line: str
