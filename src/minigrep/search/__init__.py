"""Line search package."""

from .filter import filter_lines, find_hits, search, search_case_insensitive, split_lines
from .models import SearchHit

__all__ = [
    "SearchHit",
    "filter_lines",
    "find_hits",
    "search",
    "search_case_insensitive",
    "split_lines",
]
