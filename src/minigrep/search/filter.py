"""Substring line filtering over an in-memory corpus."""

from __future__ import annotations

from minigrep.search.models import SearchHit


def split_lines(contents: str) -> list[str]:
    """Split on "\\n" only, dropping one trailing "\\r" per line.

    A final newline does not start an extra empty line. Other separators
    (form feed, U+2028, a bare "\\r") stay inside their line.
    """
    if not contents:
        return []
    pieces = contents.split("\n")
    if pieces[-1] == "":
        pieces.pop()
    return [piece[:-1] if piece.endswith("\r") else piece for piece in pieces]


def search(query: str, contents: str) -> list[str]:
    """Return lines of contents containing query, in corpus order."""
    return [line for line in split_lines(contents) if query in line]


def search_case_insensitive(query: str, contents: str) -> list[str]:
    """Return lines containing query when both are case-folded.

    Matching lines are returned as they appear in the corpus.
    """
    folded_query = query.casefold()
    return [line for line in split_lines(contents) if folded_query in line.casefold()]


def filter_lines(contents: str, query: str, ignore_case: bool = False) -> list[str]:
    """Dispatch to case-sensitive or case-insensitive search."""
    if ignore_case:
        return search_case_insensitive(query, contents)
    return search(query, contents)


def find_hits(contents: str, query: str, ignore_case: bool = False) -> list[SearchHit]:
    """Return matching lines with their 1-based line numbers."""
    needle = query.casefold() if ignore_case else query
    hits: list[SearchHit] = []
    for index, line in enumerate(split_lines(contents), start=1):
        haystack = line.casefold() if ignore_case else line
        if needle in haystack:
            hits.append(SearchHit(line_number=index, line=line))
    return hits
