"""Virtual Art Gallery - Streamlit application."""

import asyncio
from datetime import datetime

import streamlit as st

from art_gallery.adapters import HarvardAdapter
from art_gallery.config import PAGE_SIZE, Settings
from art_gallery.controller import GalleryController
from art_gallery.errors import ConfigError
from art_gallery.models import FACET_LABELS, ArtItem, GallerySnapshot
from art_gallery.state import FACETS

# Configuration
GRID_COLUMNS = 3
MAX_LOG_ENTRIES = 200
ALL_OPTIONS_LABEL = "All"

st.set_page_config(page_title="Virtual Art Gallery", layout="wide")


# =============================================================================
# Session State Initialization
# =============================================================================

def init_session_state():
    """Initialize all session state variables."""
    defaults = {
        "debug_logs": [],
        "controller": None,
        "search_text": "",
        **{f"filter_{facet}": ALL_OPTIONS_LABEL for facet in FACETS},
    }
    for key, default in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = default


init_session_state()


# =============================================================================
# Logging
# =============================================================================

def _append_log(level: str, message: str):
    """Append a log entry to session state."""
    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    entry = f"{timestamp} | {level:<5} | {message}"
    st.session_state.debug_logs.append(entry)
    # Keep last MAX_LOG_ENTRIES entries
    st.session_state.debug_logs = st.session_state.debug_logs[-MAX_LOG_ENTRIES:]


def log_event(message: str):
    _append_log("INFO", message)


def controller_log_callback(level: str, message: str):
    """Callback for the controller and adapter to log through our system."""
    _append_log(level, message)


# =============================================================================
# Controller
# =============================================================================

def load_settings() -> Settings:
    """Read settings from the environment, falling back to Streamlit secrets for the key."""
    api_key = None
    try:
        api_key = st.secrets.get("HARVARD_API_KEY")
    except FileNotFoundError:
        # No secrets.toml; the environment must provide the key
        pass
    return Settings.from_env(api_key=api_key)


def get_controller() -> GalleryController:
    """Create the session's controller on first use."""
    if st.session_state.controller is None:
        adapter = HarvardAdapter(load_settings())
        controller = GalleryController(adapter)
        controller.set_logger(controller_log_callback)
        st.session_state.controller = controller
        log_event(f"Gallery created for {adapter.name}")
    return st.session_state.controller


def dispatch(action):
    """Run ``action(controller)`` and wait for the fetches it starts."""
    controller = get_controller()

    async def _run():
        action(controller)
        await controller.settle()

    asyncio.run(_run())


# =============================================================================
# Widget callbacks
# =============================================================================

def _close_and(action):
    """Clear the selection first; closing the dialog with its X icon leaves it set."""
    def _run(controller: GalleryController):
        controller.select_item(None)
        action(controller)
    return _run


def on_search_change():
    text = st.session_state.search_text
    dispatch(_close_and(lambda c: c.set_search_text(text.strip())))


def on_filter_change(facet: str):
    value = st.session_state[f"filter_{facet}"]
    dispatch(_close_and(lambda c: c.set_filter(facet, "" if value == ALL_OPTIONS_LABEL else value)))


def on_page_click(page: int):
    dispatch(_close_and(lambda c: c.set_page(page)))


def on_show_details(item: ArtItem):
    get_controller().select_item(item)


def on_close_details():
    get_controller().select_item(None)


def on_retry():
    log_event("Retry requested")
    dispatch(_close_and(lambda c: c.refresh()))


def on_reload_facets():
    dispatch(_close_and(lambda c: c.refresh_facets()))


def on_clear_logs():
    get_controller().select_item(None)
    st.session_state.debug_logs = []


# =============================================================================
# UI Components
# =============================================================================

def render_sidebar(snapshot: GallerySnapshot):
    """Render the sidebar with facet filters and debug console."""
    with st.sidebar:
        st.subheader("Filters")
        st.caption("Please select one option per filter")

        for facet in FACETS:
            options = [ALL_OPTIONS_LABEL] + snapshot.filter_options.names(facet)
            key = f"filter_{facet}"
            if st.session_state[key] not in options:
                options.append(st.session_state[key])
            st.selectbox(
                FACET_LABELS[facet],
                options,
                key=key,
                on_change=on_filter_change,
                args=(facet,),
            )

        st.button("Reload filter options", on_click=on_reload_facets)

        # Debug console
        with st.expander("Debug Console", expanded=False):
            st.button("Clear Logs", on_click=on_clear_logs)
            log_text = "\n".join(st.session_state.debug_logs) if st.session_state.debug_logs else "No logs yet."
            st.code(log_text, language=None)


def render_card(item: ArtItem):
    """Render one card of the result grid."""
    with st.container(border=True):
        if item.primary_image_url:
            st.image(item.primary_image_url, width="stretch")
        st.markdown(f"**{item.display_title}**")
        st.caption(item.display_date)
        st.button(
            "More Details",
            key=f"details_{item.id}",
            on_click=on_show_details,
            args=(item,),
        )


def render_grid(snapshot: GallerySnapshot):
    """Render the result grid, or the empty/error state."""
    if snapshot.has_error:
        st.error(snapshot.error)
        st.button("Try Again", on_click=on_retry)
        return

    if snapshot.no_results:
        st.markdown("#### No results found.")
        return

    for row_start in range(0, len(snapshot.items), GRID_COLUMNS):
        columns = st.columns(GRID_COLUMNS)
        for column, item in zip(columns, snapshot.items[row_start:row_start + GRID_COLUMNS]):
            with column:
                render_card(item)


def render_pagination(snapshot: GallerySnapshot):
    """Render first/previous, the page window, and next/last."""
    controls = snapshot.pagination.controls()
    columns = st.columns(len(controls))
    for index, (column, control) in enumerate(zip(columns, controls)):
        with column:
            st.button(
                control.label,
                key=f"page_control_{index}",
                disabled=control.disabled or control.active,
                type="primary" if control.active else "secondary",
                on_click=on_page_click,
                args=(control.target,),
                width="stretch",
            )
    st.caption(
        f"Page {snapshot.page} of {snapshot.total_pages} "
        f"({snapshot.total_records} records, {PAGE_SIZE} per page)"
    )


def render_details(snapshot: GallerySnapshot):
    """Render the detail dialog for the selected item."""
    item = snapshot.selected_item
    if item is None:
        return

    @st.dialog(item.display_title, width="large")
    def _details():
        st.markdown(f"**Title:** {item.display_title}")
        st.markdown(f"**Artist:** {item.display_artist}")
        st.markdown(f"**Date:** {item.display_date}")
        st.markdown(f"**Description:** {item.display_description}")
        if item.primary_image_url:
            st.image(item.primary_image_url, width="stretch")
        if item.detail_url:
            st.link_button("View on Harvard Art Museums", item.detail_url, type="primary")
        if st.button("Close"):
            on_close_details()
            st.rerun()

    _details()


# =============================================================================
# Main Application
# =============================================================================

def main():
    """Main application entry point."""
    try:
        controller = get_controller()
    except ConfigError as e:
        st.error(str(e))
        st.stop()

    if not controller.started:
        with st.spinner("Loading the collection..."):
            dispatch(lambda c: c.start())

    snapshot = controller.snapshot

    render_sidebar(snapshot)

    st.markdown("### Virtual Art Gallery")
    st.text_input(
        "Search",
        key="search_text",
        placeholder="Search by title, date, author, etc.",
        on_change=on_search_change,
        label_visibility="collapsed",
    )

    render_grid(snapshot)
    if not snapshot.has_error:
        render_pagination(snapshot)
    render_details(snapshot)


if __name__ == "__main__":
    main()
