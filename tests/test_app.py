"""Tests for the Streamlit application, driven through Streamlit's AppTest.

HTTP is stubbed by patching ``requests.get`` for the whole script run.
"""
from unittest.mock import Mock, patch

import pytest
import requests
from streamlit.testing.v1 import AppTest

from art_gallery.models import ArtItem

REQUESTS_GET = "art_gallery.adapters.base.requests.get"

OBJECTS = {
    "info": {"totalrecords": 2},
    "records": [
        {
            "id": 1,
            "title": "Vase",
            "dated": "1750",
            "primaryimageurl": "https://nrs.example.org/1",
            "url": "https://harvardartmuseums.org/collections/object/1",
        },
        {"id": 2, "title": "Bowl"},
    ],
}
FACET_OPTIONS = {"records": [{"id": 10, "name": "Vessels"}]}


def _catalog(objects_error=None):
    def get(url, params=None, **kwargs):
        if url.endswith("/object"):
            if objects_error is not None:
                raise objects_error
            body = OBJECTS
        else:
            body = FACET_OPTIONS
        response = Mock()
        response.json.return_value = body
        return response
    return get


@pytest.fixture(autouse=True)
def gallery_env(monkeypatch):
    monkeypatch.setenv("HARVARD_API_KEY", "test-key")
    monkeypatch.setenv("HARVARD_BASE_URL", "https://api.example.org")
    for name in ("GALLERY_FETCH_TIMEOUT", "GALLERY_SSL_BYPASS", "GALLERY_REFETCH_FACETS"):
        monkeypatch.delenv(name, raising=False)


def _run_app(get):
    at = AppTest.from_file("../app.py", default_timeout=10)
    with patch(REQUESTS_GET, side_effect=get):
        at.run()
    return at


def _click(at, label, get):
    button = next(b for b in at.button if b.label == label)
    with patch(REQUESTS_GET, side_effect=get):
        button.click().run()


def test_renders_result_grid():
    at = _run_app(_catalog())

    assert not at.exception
    controller = at.session_state["controller"]
    assert [item.id for item in controller.snapshot.items] == [1, 2]
    labels = [b.label for b in at.button]
    assert labels.count("More Details") == 2
    assert "Try Again" not in labels


def test_search_failure_shows_retry():
    at = _run_app(_catalog(objects_error=requests.ConnectionError()))

    assert not at.exception
    assert "Could not connect" in at.error[0].value
    assert "Try Again" in [b.label for b in at.button]


class TestSelectionClearedByButtons:
    """Closing the dialog with its X icon leaves the selection set; other buttons must clear it."""

    def test_try_again(self):
        get = _catalog(objects_error=requests.ConnectionError())
        at = _run_app(get)
        controller = at.session_state["controller"]
        controller.select_item(ArtItem(id=1, title="Vase"))

        _click(at, "Try Again", get)

        assert not at.exception
        assert controller.snapshot.selected_item is None

    @pytest.mark.parametrize("label", ["Reload filter options", "Clear Logs"])
    def test_sidebar_buttons(self, label):
        get = _catalog()
        at = _run_app(get)
        controller = at.session_state["controller"]
        controller.select_item(ArtItem(id=1, title="Vase"))

        _click(at, label, get)

        assert not at.exception
        assert controller.snapshot.selected_item is None
