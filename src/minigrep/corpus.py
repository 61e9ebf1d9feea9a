"""Eager corpus loading with size and readability checks."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(slots=True, frozen=True)
class CorpusReadError(Exception):
    """Raised when the target file cannot be loaded as text."""

    reason: str
    hint: str

    def __str__(self) -> str:
        return self.reason


def read_corpus(path: Path, max_file_bytes: int) -> str:
    """Read the whole file as UTF-8 text, raising CorpusReadError on failure."""
    if not path.exists():
        raise CorpusReadError(
            reason=f"File not found: {path}",
            hint="Check the filename argument.",
        )
    if not path.is_file():
        raise CorpusReadError(
            reason=f"Not a regular file: {path}",
            hint="Pass a single file; directories are not searched.",
        )
    try:
        file_size = path.stat().st_size
        if file_size > max_file_bytes:
            raise CorpusReadError(
                reason=f"File exceeds max_file_bytes limit ({max_file_bytes}): {path}",
                hint="Search a smaller file or raise --max-file-bytes.",
            )
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise CorpusReadError(
            reason=f"File is not valid UTF-8 text: {path}",
            hint="Only UTF-8 text files can be searched.",
        ) from exc
    except OSError as exc:
        raise CorpusReadError(
            reason=f"Error reading {path}: {exc.strerror or exc}",
            hint="Check that the file is readable.",
        ) from exc
