"""Unit tests for the pagination window."""
import pytest

from art_gallery.pagination import pagination_window


class TestWindowBounds:

    @pytest.mark.parametrize("page, total, start, end", [
        (1, 1, 1, 1),
        (1, 3, 1, 3),
        (5, 20, 1, 10),
        (6, 20, 1, 10),
        (7, 20, 2, 11),
        (12, 20, 7, 16),
        (18, 20, 11, 20),
        (20, 20, 11, 20),
        (100, 250, 95, 104),
    ])
    def test_examples(self, page, total, start, end):
        window = pagination_window(page, total)
        assert (window.start, window.end) == (start, end)

    def test_every_window_is_full_and_contains_page(self):
        for total in range(1, 40):
            for page in range(1, total + 1):
                window = pagination_window(page, total)
                assert len(window.pages) == min(10, total), (page, total)
                assert page in window.pages, (page, total)
                assert 1 <= window.start <= window.end <= total

    def test_out_of_range_input_is_clamped(self):
        assert pagination_window(0, 5).page == 1
        assert pagination_window(9, 5).page == 5
        assert pagination_window(1, 0).total_pages == 1

    def test_custom_window_size(self):
        window = pagination_window(10, 30, window=5)
        assert list(window.pages) == [8, 9, 10, 11, 12]


class TestControls:

    def test_layout(self):
        controls = pagination_window(2, 3).controls()

        assert [c.label for c in controls] == ["«", "‹", "1", "2", "3", "›", "»"]
        assert [c.target for c in controls] == [1, 1, 1, 2, 3, 3, 3]
        assert [c.label for c in controls if c.active] == ["2"]
        assert not any(c.disabled for c in controls)

    def test_first_page_disables_first_and_previous(self):
        controls = pagination_window(1, 3).controls()

        assert [c.disabled for c in controls[:2]] == [True, True]
        assert [c.disabled for c in controls[-2:]] == [False, False]

    def test_last_page_disables_next_and_last(self):
        controls = pagination_window(3, 3).controls()

        assert [c.disabled for c in controls[:2]] == [False, False]
        assert [c.disabled for c in controls[-2:]] == [True, True]

    def test_single_page_disables_everything_but_the_page(self):
        controls = pagination_window(1, 1).controls()

        assert [c.label for c in controls if not c.disabled] == ["1"]
