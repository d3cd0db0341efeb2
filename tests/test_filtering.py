"""Tests for entry filtering."""

import itertools

import pytest

from cashbook.domain.filtering import entries_for_category, filter_entries, matches

from conftest import make_entry


@pytest.fixture
def journal():
    return [
        make_entry("d", "2024-03-01", "Fuel", notes="Generator DIESEL"),
        make_entry("c", "2024-02-15", "Salary advance", category_id="cat-salary"),
        make_entry("b", "2024-02-01", "Diesel for truck"),
        make_entry("a", "2024-01-31", "Opening balance", notes=""),
    ]


def test_no_criteria_returns_everything(journal):
    assert filter_entries(journal) == journal
    assert filter_entries(journal, None, None, None) == journal


def test_search_matches_statement_case_insensitive(journal):
    result = filter_entries(journal, search_text="diesel")
    assert [e.id for e in result] == ["d", "b"]


def test_search_matches_notes(journal):
    result = filter_entries(journal, search_text="generator")
    assert [e.id for e in result] == ["d"]


def test_search_matches_arabic_text():
    entries = [make_entry("a", statement="دفعة إيجار المكتب"), make_entry("b", statement="مبيعات")]
    assert [e.id for e in filter_entries(entries, search_text="إيجار")] == ["a"]


def test_date_bounds_are_inclusive(journal):
    result = filter_entries(journal, start_date="2024-02-01", end_date="2024-02-15")
    assert [e.id for e in result] == ["c", "b"]


def test_start_date_only(journal):
    result = filter_entries(journal, start_date="2024-02-15")
    assert [e.id for e in result] == ["d", "c"]


def test_end_date_only(journal):
    result = filter_entries(journal, end_date="2024-01-31")
    assert [e.id for e in result] == ["a"]


def test_search_and_dates_combined(journal):
    result = filter_entries(journal, search_text="diesel", start_date="2024-02-02")
    assert [e.id for e in result] == ["d"]


def test_empty_range_returns_nothing(journal):
    assert filter_entries(journal, start_date="2024-03-02", end_date="2024-12-31") == []


def test_single_day_scenario():
    entry_a = make_entry("A", "2024-01-01", "A", received_primary=100)
    assert filter_entries([entry_a], "", "2024-01-01", "2024-01-01") == [entry_a]


def test_preserves_order_and_does_not_mutate_input(journal):
    original = list(journal)
    result = filter_entries(journal, search_text="a")
    assert journal == original
    positions = [journal.index(e) for e in result]
    assert positions == sorted(positions)


@pytest.mark.parametrize(
    "search_text,start_date,end_date",
    [
        ("", "", ""),
        ("diesel", "", ""),
        ("", "2024-02-01", ""),
        ("", "", "2024-02-14"),
        ("e", "2024-01-31", "2024-02-15"),
        ("missing", "", ""),
    ],
)
def test_filter_is_sound_and_complete(journal, search_text, start_date, end_date):
    result = filter_entries(journal, search_text, start_date, end_date)
    for entry in result:
        assert entry in journal
        assert matches(entry, search_text, start_date, end_date)
    for entry in journal:
        if matches(entry, search_text, start_date, end_date):
            assert entry in result


def test_filter_is_deterministic(journal):
    for permutation in itertools.islice(itertools.permutations(journal), 6):
        first = filter_entries(list(permutation), "e", "2024-02-01", "")
        second = filter_entries(list(permutation), "e", "2024-02-01", "")
        assert first == second


def test_entries_for_category(journal):
    assert [e.id for e in entries_for_category(journal, "cat-salary")] == ["c"]
    assert entries_for_category(journal, "cat-missing") == []
