"""
Tests for ExportSession: tour selection, debounced previews, stale
preview discarding and background exports.
"""

import threading
import pytest
from dataclasses import replace
from types import SimpleNamespace
from unittest.mock import patch

from encore_export.export import (
    ExportError,
    ExportSession,
    ExportSettings,
    Preset,
)
from encore_export.export import session as session_module
from encore_export.export.assets import StaticPosterProvider
from encore_export.store import InMemoryTourStore, StoreError

from conftest import POSTER_URL, make_aggregate


# Long enough that scheduled previews never fire on their own
NEVER_MS = 60_000


def make_session(debounce_ms=NEVER_MS, posters=None, on_preview=None):
    settings = ExportSettings(render_scale=1.0, preview_scale=1.0, debounce_ms=debounce_ms)
    return ExportSession(
        InMemoryTourStore([make_aggregate()]),
        settings=settings,
        poster_provider=posters or StaticPosterProvider(),
        on_preview=on_preview,
    )


@pytest.fixture
def session():
    s = make_session()
    yield s
    s.close()


class TestTourSelection:
    """Tests for select_tour()."""

    def test_when_no_tour_selected_then_empty_state(self, session):
        assert session.aggregate is None
        assert session.preview is None
        assert session.empty_message == "Select a tour to export."

    def test_when_tour_selected_then_first_show_preselected(self, session):
        aggregate = session.select_tour("tour-1")

        assert aggregate.tour_id == "tour-1"
        assert session.config.selected_show_id == "show-1"
        assert session.config.preset == Preset.SHOW

    def test_when_tour_reselected_then_config_reset(self, session):
        session.select_tour("tour-1")
        session.update_config(preset=Preset.TRAVEL, notes="Bus at 9")

        session.select_tour("tour-1")

        assert session.config.preset == Preset.SHOW
        assert session.config.notes == ""

    def test_when_selection_cleared_then_empty_state_published(self):
        published = []
        session = make_session(on_preview=published.append)
        try:
            session.select_tour("tour-1")
            session.refresh_preview()

            session.select_tour(None)

            assert session.aggregate is None
            assert session.preview is None
            assert session.empty_message == "Select a tour to export."
            assert published[-1] is None
            assert session.wait_for_preview(timeout=1)
        finally:
            session.close()

    def test_when_tour_missing_then_store_error_and_selection_cleared(self, session):
        session.select_tour("tour-1")

        with pytest.raises(StoreError):
            session.select_tour("tour-404")

        assert session.aggregate is None
        assert session.preview is None
        assert session.wait_for_preview(timeout=1)

    def test_when_older_fetch_finishes_last_then_newer_selection_kept(self):
        first = make_aggregate()
        second = replace(first, tour=replace(first.tour, id="tour-2", tour_name="Summer Run"))
        started = threading.Event()
        release = threading.Event()

        class SlowStore(InMemoryTourStore):
            def fetch_aggregate(self, tour_id):
                if tour_id == "tour-1":
                    started.set()
                    release.wait(5)
                return super().fetch_aggregate(tour_id)

        session = ExportSession(
            SlowStore([first, second]),
            settings=ExportSettings(render_scale=1.0, preview_scale=1.0, debounce_ms=NEVER_MS),
            poster_provider=StaticPosterProvider(),
        )
        returned = []
        try:
            worker = threading.Thread(target=lambda: returned.append(session.select_tour("tour-1")))
            worker.start()
            assert started.wait(5)

            session.select_tour("tour-2")
            release.set()
            worker.join(5)

            assert returned == [None]
            assert session.aggregate.tour_id == "tour-2"
        finally:
            release.set()
            session.close()

    def test_when_tours_listed_then_owner_only(self, session):
        assert [t.id for t in session.list_tours("user-1")] == ["tour-1"]
        assert session.list_tours("someone-else") == []


class TestPreview:
    """Tests for preview generation and scheduling."""

    def test_when_refreshed_then_preview_published(self, session):
        session.select_tour("tour-1")

        preview = session.refresh_preview()

        assert preview is session.preview
        assert preview.page_count == 1
        assert session.empty_message is None

    def test_when_show_deselected_then_empty_message(self, session):
        session.select_tour("tour-1")
        session.update_config(selected_show_id=None)

        assert session.refresh_preview() is None
        assert session.empty_message == "Select a show to export."

    def test_when_preview_fails_then_error_message(self, session):
        session.select_tour("tour-1")

        with patch.object(session_module, "generate_preview", side_effect=RuntimeError("boom")):
            assert session.refresh_preview() is None

        assert session.empty_message == "Preview could not be generated."

    def test_when_config_changes_rapidly_then_single_regeneration(self):
        session = make_session(debounce_ms=300)
        calls = []

        def counting(aggregate, config, **kwargs):
            calls.append(config.notes)
            return SimpleNamespace(notes=config.notes)

        try:
            with patch.object(session_module, "generate_preview", side_effect=counting):
                session.select_tour("tour-1")
                session.update_config(notes="B")
                session.update_config(notes="Bu")
                session.update_config(notes="Bus at 9")

                assert session.wait_for_preview(timeout=5)

            assert calls == ["Bus at 9"]
            assert session.preview.notes == "Bus at 9"
        finally:
            session.close()

    def test_when_newer_config_arrives_then_stale_preview_discarded(self):
        published = []
        session = make_session(on_preview=published.append)
        started = threading.Event()
        release = threading.Event()

        def slow_first(aggregate, config, **kwargs):
            if config.notes == "old":
                started.set()
                release.wait(5)
            return SimpleNamespace(notes=config.notes)

        try:
            with patch.object(session_module, "generate_preview", side_effect=slow_first):
                session.select_tour("tour-1")
                session.update_config(notes="old")
                worker = threading.Thread(target=session.refresh_preview)
                worker.start()
                assert started.wait(5)

                session.update_config(notes="new")
                session.refresh_preview()
                release.set()
                worker.join(5)

            assert [p.notes for p in published] == ["new"]
            assert session.preview.notes == "new"
        finally:
            session.close()

    def test_when_poster_needed_then_fetched_once_per_selection(self, poster_image):
        posters = StaticPosterProvider({POSTER_URL: poster_image})
        session = make_session(posters=posters)
        try:
            session.select_tour("tour-1")
            session.refresh_preview()
            session.update_config(notes="Bus at 9")
            session.refresh_preview()
            assert posters.requests == [POSTER_URL]

            session.select_tour("tour-1")
            session.refresh_preview()
            assert posters.requests == [POSTER_URL, POSTER_URL]
        finally:
            session.close()


class TestExport:
    """Tests for synchronous and background exports."""

    def test_when_exported_then_pdf_written(self, session, tmp_path):
        session.select_tour("tour-1")

        result = session.export(tmp_path)

        assert result.pdf_path.exists()
        assert result.pdf_path.name == "The Band - Leeds Day Sheet.pdf"

    def test_when_nothing_selected_then_export_error(self, session, tmp_path):
        with pytest.raises(ExportError, match="Select a tour"):
            session.export(tmp_path)

    def test_when_submitted_then_config_captured_at_submit(self, session, tmp_path):
        session.select_tour("tour-1")

        future = session.submit_export(tmp_path)
        session.update_config(preset=Preset.TRAVEL)
        result = future.result(timeout=30)

        assert result.suggested_name == "The Band - Leeds Day Sheet.pdf"
        assert result.pdf_path.exists()

    def test_when_submitted_without_selection_then_future_raises(self, session, tmp_path):
        future = session.submit_export(tmp_path)

        with pytest.raises(ExportError):
            future.result(timeout=30)


class TestLifecycle:
    """Tests for close() and context manager use."""

    def test_when_closed_then_further_use_rejected(self):
        session = make_session()
        session.close()
        session.close()

        with pytest.raises(RuntimeError, match="closed"):
            session.select_tour("tour-1")

    def test_when_closed_then_waiters_released(self):
        session = make_session()
        session.select_tour("tour-1")

        session.close()

        assert session.wait_for_preview(timeout=1)

    def test_when_used_as_context_manager_then_closed(self, tmp_path):
        with make_session() as session:
            session.select_tour("tour-1")
            session.export(tmp_path)

        with pytest.raises(RuntimeError):
            session.update_config(notes="x")
