"""Tests for page/page_size clamping."""

from crewdesk.domain.policies.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, to_window


def test_defaults():
    w = to_window()
    assert (w.page, w.page_size, w.offset, w.limit) == (1, DEFAULT_PAGE_SIZE, 0, 25)


def test_none_means_default():
    w = to_window(None, None)
    assert w.page == 1
    assert w.page_size == 25


def test_offset_for_later_page():
    w = to_window(3, 10)
    assert w.offset == 20
    assert w.limit == 10


def test_page_clamped_to_one():
    assert to_window(0, 10).page == 1
    assert to_window(-5, 10).offset == 0


def test_page_size_clamped_to_range():
    assert to_window(1, 0).page_size == 1
    assert to_window(1, -3).page_size == 1
    assert to_window(1, 10_000).page_size == MAX_PAGE_SIZE
    assert to_window(2, 500).offset == MAX_PAGE_SIZE
