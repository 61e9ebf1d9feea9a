"""Configuration loading and deterministic merge order."""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from pathlib import Path

CONFIG_FILE_NAME = "minigrep.toml"
IGNORE_CASE_ENV_VAR = "MINIGREP_IGNORE_CASE"
USAGE = "minigrep <query> <filename>"

DEFAULT_MAX_FILE_BYTES = 10 * 1024 * 1024
MAX_FILE_BYTES_CAP = 64 * 1024 * 1024


class UsageError(Exception):
    """Raised when the command line does not carry a query and a filename."""


@dataclass(slots=True, frozen=True)
class SearchConfig:
    """Fully merged configuration for a single search run."""

    query: str
    filename: str
    ignore_case: bool = False
    line_numbers: bool = False
    verbose: bool = False
    max_file_bytes: int = DEFAULT_MAX_FILE_BYTES
    audit_log: Path | None = None

    def to_public_dict(self) -> dict[str, object]:
        """Return a serializable snapshot without the query text."""
        return {
            "filename": self.filename,
            "ignore_case": self.ignore_case,
            "line_numbers": self.line_numbers,
            "max_file_bytes": self.max_file_bytes,
            "audit_log": str(self.audit_log) if self.audit_log is not None else None,
        }


@dataclass(slots=True, frozen=True)
class CliOverrides:
    """Optional flags applied at highest precedence."""

    ignore_case: bool | None = None
    line_numbers: bool | None = None
    verbose: bool | None = None
    max_file_bytes: int | None = None
    audit_log: Path | None = None


def default_config(query: str, filename: str) -> SearchConfig:
    """Build default config for a query and target file."""
    return SearchConfig(query=query, filename=filename)


def ignore_case_from_env(environ: Mapping[str, str] | None = None) -> bool | None:
    """Return True when MINIGREP_IGNORE_CASE is exactly "1", else None."""
    env = os.environ if environ is None else environ
    if env.get(IGNORE_CASE_ENV_VAR) == "1":
        return True
    return None


def load_config_file(directory: Path) -> dict[str, object]:
    """Load optional minigrep.toml from a directory."""
    config_path = directory / CONFIG_FILE_NAME
    if not config_path.is_file():
        return {}
    with config_path.open("rb") as handle:
        payload = tomllib.load(handle)
    if not isinstance(payload, dict):
        raise ValueError(f"{CONFIG_FILE_NAME} must contain a top-level table.")
    return payload


def _get_table(payload: Mapping[str, object], key: str) -> Mapping[str, object]:
    value = payload.get(key, {})
    if not isinstance(value, dict):
        raise ValueError(f"Config section '{key}' must be a table.")
    return value


def _optional_bool(
    table: Mapping[str, object], section: str, field: str, default: bool
) -> bool:
    if field not in table:
        return default
    value = table[field]
    if not isinstance(value, bool):
        raise ValueError(f"Config field '{section}.{field}' must be a boolean.")
    return value


def _optional_positive_int_with_cap(value: object, name: str, default: int, cap: int) -> int:
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"Config field '{name}' must be a positive integer.")
    if value > cap:
        raise ValueError(f"Config field '{name}' must be <= {cap}.")
    return value


def merge_config(
    base: SearchConfig,
    payload: Mapping[str, object],
    environ: Mapping[str, str] | None = None,
    overrides: CliOverrides | None = None,
) -> SearchConfig:
    """Merge defaults, config file, environment, then CLI overrides."""
    search_payload = _get_table(payload, "search")
    output_payload = _get_table(payload, "output")
    logging_payload = _get_table(payload, "logging")

    ignore_case = _optional_bool(search_payload, "search", "ignore_case", base.ignore_case)
    max_file_bytes = _optional_positive_int_with_cap(
        search_payload.get("max_file_bytes"),
        "search.max_file_bytes",
        base.max_file_bytes,
        MAX_FILE_BYTES_CAP,
    )
    line_numbers = _optional_bool(
        output_payload, "output", "line_numbers", base.line_numbers
    )

    audit_log = base.audit_log
    if "audit_log" in logging_payload:
        raw_audit_log = logging_payload["audit_log"]
        if not isinstance(raw_audit_log, str) or not raw_audit_log:
            raise ValueError("Config field 'logging.audit_log' must be a non-empty string.")
        audit_log = Path(raw_audit_log)

    if ignore_case_from_env(environ):
        ignore_case = True

    merged = replace(
        base,
        ignore_case=ignore_case,
        line_numbers=line_numbers,
        max_file_bytes=max_file_bytes,
        audit_log=audit_log,
    )
    return apply_cli_overrides(merged, overrides or CliOverrides())


def apply_cli_overrides(config: SearchConfig, overrides: CliOverrides) -> SearchConfig:
    """Apply command line flags at highest precedence."""
    max_file_bytes = _optional_positive_int_with_cap(
        overrides.max_file_bytes,
        "overrides.max_file_bytes",
        config.max_file_bytes,
        MAX_FILE_BYTES_CAP,
    )
    return replace(
        config,
        ignore_case=(
            overrides.ignore_case if overrides.ignore_case is not None else config.ignore_case
        ),
        line_numbers=(
            overrides.line_numbers if overrides.line_numbers is not None else config.line_numbers
        ),
        verbose=overrides.verbose if overrides.verbose is not None else config.verbose,
        max_file_bytes=max_file_bytes,
        audit_log=overrides.audit_log or config.audit_log,
    )


def load_effective_config(
    query: str,
    filename: str,
    config_dir: Path | None = None,
    environ: Mapping[str, str] | None = None,
    overrides: CliOverrides | None = None,
) -> SearchConfig:
    """Load effective config using merge order defaults -> file -> env -> flags."""
    directory = config_dir if config_dir is not None else Path.cwd()
    payload = load_config_file(directory)
    return merge_config(default_config(query, filename), payload, environ, overrides)


def config_from_args(
    args: Sequence[str], environ: Mapping[str, str] | None = None
) -> SearchConfig:
    """Build a config from a raw argv list whose first item is the program name.

    Library entry point for callers holding a plain argv list; the console
    script parses its arguments with argparse instead. Only the environment
    toggle is layered on top of the defaults here.
    """
    if len(args) < 3:
        raise UsageError(f"Not enough arguments. USAGE is: {USAGE}")
    config = default_config(query=args[1], filename=args[2])
    return merge_config(config, {}, environ)
