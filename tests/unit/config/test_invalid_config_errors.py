from __future__ import annotations

from pathlib import Path

import pytest

from minigrep.config import CliOverrides, load_effective_config


def _load(tmp_path: Path, lines: list[str], overrides: CliOverrides | None = None) -> None:
    (tmp_path / "minigrep.toml").write_text("\n".join(lines), encoding="utf-8")
    load_effective_config(
        "needle", "poem.txt", config_dir=tmp_path, environ={}, overrides=overrides
    )


def test_invalid_bool_type_raises_value_error(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="search.ignore_case"):
        _load(tmp_path, ["[search]", 'ignore_case = "yes"'])


def test_invalid_section_type_raises_value_error(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="section 'output'"):
        _load(tmp_path, ['output = "not-a-table"'])


def test_non_positive_max_file_bytes_raises_value_error(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="search.max_file_bytes"):
        _load(tmp_path, ["[search]", "max_file_bytes = 0"])


def test_max_file_bytes_above_cap_raises_value_error(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="must be <="):
        _load(tmp_path, [], overrides=CliOverrides(max_file_bytes=10**12))


def test_empty_audit_log_raises_value_error(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="logging.audit_log"):
        _load(tmp_path, ["[logging]", 'audit_log = ""'])


def test_malformed_toml_raises_value_error(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        _load(tmp_path, ["[search", "ignore_case = true"])
