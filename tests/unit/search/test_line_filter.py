from __future__ import annotations

from minigrep.search import (
    SearchHit,
    filter_lines,
    find_hits,
    search,
    search_case_insensitive,
    split_lines,
)

POEM = "Rust:\nsafe, fast, productive.\nPick three."


def test_case_sensitive_returns_single_matching_line() -> None:
    assert search("duct", POEM) == ["safe, fast, productive."]


def test_case_sensitive_skips_different_case() -> None:
    contents = "Rust:\nsafe, fast, productive.\nPick three.\nTrust me."
    assert search("rust", contents) == ["Trust me."]


def test_case_insensitive_returns_original_lines() -> None:
    contents = "Rust:\nsafe, fast, productive.\nPick three.\nTrust me."
    assert search_case_insensitive("rUsT", contents) == ["Rust:", "Trust me."]


def test_no_match_returns_empty_list() -> None:
    assert search("needle", POEM) == []
    assert search_case_insensitive("needle", POEM) == []


def test_matches_preserve_file_order() -> None:
    contents = "b needle\na needle\nnothing\nc needle"
    assert search("needle", contents) == ["b needle", "a needle", "c needle"]


def test_trailing_newline_does_not_add_empty_line() -> None:
    assert search("", "one\ntwo\n") == ["one", "two"]


def test_empty_corpus_yields_no_lines() -> None:
    assert search("", "") == []
    assert find_hits("", "anything") == []


def test_filter_lines_dispatches_on_ignore_case() -> None:
    assert filter_lines(POEM, "PICK") == []
    assert filter_lines(POEM, "PICK", ignore_case=True) == ["Pick three."]


def test_find_hits_reports_one_based_line_numbers() -> None:
    contents = "Rust:\nsafe, fast, productive.\nneedle in the haystack\nPick three."
    hits = find_hits(contents, "needle")
    assert hits == [SearchHit(line_number=3, line="needle in the haystack")]


def test_find_hits_case_insensitive() -> None:
    contents = "Rust:\nsafe, fast, productive.\nneedle in the haystack\nPick three."
    hits = find_hits(contents, "NEEDLE", ignore_case=True)
    assert len(hits) == 1, f"Expected 1 result, got {len(hits)}"
    assert hits[0].line == "needle in the haystack"
    assert hits[0].line_number == 3


def test_final_sigma_matches_in_both_modes() -> None:
    contents = "ΟΔΟΣ\nother"
    assert filter_lines(contents, "Σ") == ["ΟΔΟΣ"]
    assert filter_lines(contents, "Σ", ignore_case=True) == ["ΟΔΟΣ"]
    assert find_hits("οδος\nΟΔΟΣ", "σ", ignore_case=True) == [
        SearchHit(line_number=1, line="οδος"),
        SearchHit(line_number=2, line="ΟΔΟΣ"),
    ]


def test_case_insensitive_folds_sharp_s() -> None:
    assert search_case_insensitive("STRASSE", "straße\nstreet") == ["straße"]


def test_form_feed_and_line_separator_stay_inside_their_line() -> None:
    contents = "alpha\x0cbeta\nneedle here\nsep\u2028needle\n"

    assert split_lines(contents) == ["alpha\x0cbeta", "needle here", "sep\u2028needle"]
    assert filter_lines(contents, "beta") == ["alpha\x0cbeta"]
    assert find_hits(contents, "needle") == [
        SearchHit(line_number=2, line="needle here"),
        SearchHit(line_number=3, line="sep\u2028needle"),
    ]


def test_crlf_is_stripped_but_bare_carriage_return_is_kept() -> None:
    assert split_lines("a\r\nb\rc\n") == ["a", "b\rc"]


def test_blank_lines_are_kept() -> None:
    assert split_lines("\n") == [""]
    assert split_lines("a\n\nb") == ["a", "", "b"]
