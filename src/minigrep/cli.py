"""Command line entrypoint."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TextIO

from minigrep.config import CliOverrides, SearchConfig, load_effective_config
from minigrep.corpus import CorpusReadError, read_corpus
from minigrep.logging import JsonlAuditLogger
from minigrep.search import filter_lines, find_hits

EXIT_OK = 0
EXIT_READ_ERROR = 1
EXIT_USAGE_ERROR = 2


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for a single search run."""
    parser = argparse.ArgumentParser(
        prog="minigrep",
        description="Print every line of a file that contains a query string.",
        epilog="Set MINIGREP_IGNORE_CASE=1 to search case-insensitively.",
    )
    parser.add_argument("query", help="Substring to search for.")
    parser.add_argument("filename", help="File to search in.")
    parser.add_argument(
        "-i",
        "--ignore-case",
        action="store_const",
        const=True,
        default=None,
        help="Match regardless of case.",
    )
    parser.add_argument(
        "-n",
        "--line-numbers",
        action="store_const",
        const=True,
        default=None,
        help="Prefix each match with its finding and line number.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_const",
        const=True,
        default=None,
        help="Echo the query and file on stderr.",
    )
    parser.add_argument(
        "--max-file-bytes",
        type=int,
        required=False,
        default=None,
        help="Refuse files larger than this many bytes.",
    )
    parser.add_argument(
        "--audit-log",
        required=False,
        default=None,
        help="Append a sanitized JSONL record of each run to this file.",
    )
    parser.add_argument(
        "--config-dir",
        required=False,
        default=None,
        help="Directory holding minigrep.toml. Defaults to cwd.",
    )
    return parser


def write_results(config: SearchConfig, contents: str, out_stream: TextIO) -> int:
    """Write matching lines and return how many matched."""
    if not config.line_numbers:
        lines = filter_lines(contents, config.query, ignore_case=config.ignore_case)
        for line in lines:
            out_stream.write(f"{line}\n")
        return len(lines)

    hits = find_hits(contents, config.query, ignore_case=config.ignore_case)
    for counter, hit in enumerate(hits, start=1):
        out_stream.write(f"Finding #{counter} at line {hit.line_number} :: {hit.line}\n")
    return len(hits)


def run(
    config: SearchConfig,
    out_stream: TextIO,
    err_stream: TextIO,
    audit_logger: JsonlAuditLogger | None = None,
) -> int:
    """Execute one search and return the process exit code."""
    arguments: dict[str, object] = {"query": config.query, **config.to_public_dict()}

    if config.verbose:
        err_stream.write(f"Searching for {config.query}\n")
        err_stream.write(f"In file {config.filename}\n")

    try:
        contents = read_corpus(Path(config.filename), config.max_file_bytes)
    except CorpusReadError as exc:
        err_stream.write(f"Application error: {exc.reason}\n")
        err_stream.write(f"hint: {exc.hint}\n")
        _log_run(audit_logger, arguments, err_stream, ok=False, error_code="CORPUS_UNREADABLE")
        return EXIT_READ_ERROR

    match_count = write_results(config, contents, out_stream)
    out_stream.flush()
    if match_count == 0 and config.verbose:
        err_stream.write("No results found\n")
    _log_run(audit_logger, {**arguments, "match_count": match_count}, err_stream, ok=True)
    return EXIT_OK


def _log_run(
    audit_logger: JsonlAuditLogger | None,
    arguments: dict[str, object],
    err_stream: TextIO,
    ok: bool,
    error_code: str | None = None,
) -> None:
    if audit_logger is None:
        return
    try:
        audit_logger.record_run(arguments, ok=ok, error_code=error_code)
    except OSError as exc:
        err_stream.write(f"Audit log error: {audit_logger.path}: {exc.strerror or exc}\n")


def main(argv: list[str] | None = None) -> int:
    """Entrypoint for the minigrep process."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    overrides = CliOverrides(
        ignore_case=args.ignore_case,
        line_numbers=args.line_numbers,
        verbose=args.verbose,
        max_file_bytes=args.max_file_bytes,
        audit_log=Path(args.audit_log) if args.audit_log is not None else None,
    )
    try:
        config = load_effective_config(
            query=args.query,
            filename=args.filename,
            config_dir=Path(args.config_dir) if args.config_dir is not None else None,
            overrides=overrides,
        )
        audit_logger = (
            JsonlAuditLogger(config.audit_log) if config.audit_log is not None else None
        )
    except (ValueError, OSError) as exc:
        sys.stderr.write(f"Problem parsing arguments; ERROR: {exc}\n")
        return EXIT_USAGE_ERROR
    return run(config, out_stream=sys.stdout, err_stream=sys.stderr, audit_logger=audit_logger)


if __name__ == "__main__":
    raise SystemExit(main())
