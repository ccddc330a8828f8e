"""Tests for pagination normalization."""

import pytest

from gig_api.utils.pagination import normalize_pagination


def test_defaults():
    pagination = normalize_pagination()

    assert pagination.page == 1
    assert pagination.page_size == 20
    assert pagination.offset == 0
    assert pagination.limit == 20
    assert pagination.range_end == 19


def test_query_string_values():
    pagination = normalize_pagination("3", "10")

    assert pagination.offset == 20
    assert pagination.limit == 10
    assert pagination.range_end == 29


@pytest.mark.parametrize("page,page_size", [(0, 0), (-2, -5), ("abc", None), (None, "many")])
def test_invalid_values_fall_back(page, page_size):
    pagination = normalize_pagination(page, page_size)

    assert pagination.page == 1
    assert pagination.page_size == 20


def test_page_size_capped():
    assert normalize_pagination(1, 500).page_size == 100
    assert normalize_pagination(1, 500, default_page_size=5, max_page_size=50).page_size == 50
    assert normalize_pagination(default_page_size=5).page_size == 5
