"""
Module: export.session

Purpose:
    Live export session for a host UI. Holds the selected tour aggregate
    and the export configuration, regenerates the preview after a quiet
    period whenever the configuration changes, and runs exports.

Concurrency Model:
    - Configuration changes are debounced with a threading.Timer; rapid
      edits collapse into a single regeneration.
    - Every change bumps a generation counter. A preview whose
      generation is stale when it finishes is discarded, never published.
    - Exports run on the caller's thread (`export`) or on a single
      background worker (`submit_export`). Exports are not cancellable.
    - Selecting another tour discards the previous aggregate, preview
      and cached poster.

Key Classes:
    - ExportSession: Session state and scheduling

Dependencies:
    - threading (std): Debounce timer, locking
    - concurrent.futures (std): Background export worker

Used By:
    - Host applications (UI export sheet)
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, List, Optional

from encore_export.common.airports import AirportDirectory
from encore_export.core.models import Tour, TourAggregate
from encore_export.store import TourStore

from .assets import CachingPosterProvider, PosterProvider, UrlPosterProvider
from .config import ExportConfiguration
from .controller import ExportResult, PreviewResult, export_document, generate_preview
from .layout import LayoutConfig, missing_input_reason
from .settings import ExportSettings

logger = logging.getLogger(__name__)

PreviewCallback = Callable[[Optional[PreviewResult]], None]


class ExportSession:
    """
    Export state for one host window.

    Args:
        store: Tour store used for tour selection
        settings: Export settings (scales, debounce, timezone)
        layout: Layout configuration (scale is taken from settings)
        poster_provider: Poster source (defaults to HTTP download)
        airports: Airport directory for flight local times
        clock: "Now" for Tour Overview and export metadata
        on_preview: Called with every published preview (None = empty state)

    Example:
        >>> with ExportSession(store) as session:
        ...     session.select_tour("tour-1")
        ...     session.update_config(notes="Bus at 9")
        ...     session.wait_for_preview(timeout=5)
        ...     session.export(Path("exports"))
    """

    def __init__(
        self,
        store: TourStore,
        *,
        settings: Optional[ExportSettings] = None,
        layout: Optional[LayoutConfig] = None,
        poster_provider: Optional[PosterProvider] = None,
        airports: Optional[AirportDirectory] = None,
        clock: Optional[Callable[[], datetime]] = None,
        on_preview: Optional[PreviewCallback] = None,
    ):
        self.store = store
        self.settings = settings or ExportSettings()
        self.layout = (layout or LayoutConfig()).with_scale(self.settings.render_scale)
        self.airports = airports
        self.clock = clock
        self.on_preview = on_preview
        self._posters = CachingPosterProvider(
            poster_provider or UrlPosterProvider(timeout=self.settings.poster_timeout_s)
        )

        self._lock = threading.RLock()
        self._published = threading.Condition(self._lock)
        self._generation = 0
        self._selection = 0
        self._published_generation = 0
        self._timer: Optional[threading.Timer] = None
        self._closed = False

        self._aggregate: Optional[TourAggregate] = None
        self._config = self._default_config(None)
        self._preview: Optional[PreviewResult] = None
        self._empty_message: Optional[str] = missing_input_reason(None, self._config)

        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="encore-export")

    # ── State ──────────────────────────────────────────────────────────────

    @property
    def aggregate(self) -> Optional[TourAggregate]:
        with self._lock:
            return self._aggregate

    @property
    def config(self) -> ExportConfiguration:
        with self._lock:
            return self._config

    @property
    def preview(self) -> Optional[PreviewResult]:
        """Latest published preview (None for the empty state)."""
        with self._lock:
            return self._preview

    @property
    def empty_message(self) -> Optional[str]:
        """Why there is no preview, or None when a preview exists."""
        with self._lock:
            return self._empty_message

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    # ── Tour selection ─────────────────────────────────────────────────────

    def list_tours(self, owner_id: str) -> List[Tour]:
        """Tours owned by a user, newest first."""
        return self.store.list_tours(owner_id)

    def select_tour(self, tour_id: Optional[str]) -> Optional[TourAggregate]:
        """
        Select a tour, discarding everything fetched for the previous one.

        The configuration resets to defaults with the first show selected,
        and a preview is scheduled.

        Args:
            tour_id: Tour to select, or None to clear the selection

        Returns:
            The fetched aggregate (None when clearing, or when a newer
            selection was made while this one was being fetched)

        Raises:
            StoreError: If the tour cannot be fetched; the selection is
                left cleared
        """
        with self._lock:
            self._check_open()
            self._cancel_timer()
            self._generation += 1
            self._selection += 1
            selection = self._selection
            self._aggregate = None
            self._preview = None
            self._posters.clear()
            self._config = self._default_config(None)
            self._empty_message = missing_input_reason(None, self._config)

        if tour_id is None:
            logger.info("Cleared tour selection")
            self._publish_empty()
            return None

        try:
            aggregate = self.store.fetch_aggregate(tour_id)
        except Exception:
            if selection == self._selection:
                self._publish_empty()
            raise
        with self._lock:
            if selection != self._selection or self._closed:
                logger.debug(f"Discarding superseded selection of tour {tour_id}")
                return None
            self._aggregate = aggregate
            self._config = self._default_config(aggregate)
            logger.info(f"Selected tour {aggregate.tour.tour_name!r} ({tour_id})")
            self._schedule_preview()
        return aggregate

    # ── Configuration ──────────────────────────────────────────────────────

    def update_config(self, **changes: Any) -> ExportConfiguration:
        """Replace configuration fields and schedule a preview."""
        with self._lock:
            config = self._config.with_changes(**changes)
            self.set_config(config)
            return config

    def set_config(self, config: ExportConfiguration) -> None:
        """Replace the configuration and schedule a preview."""
        with self._lock:
            self._check_open()
            self._config = config
            self._schedule_preview()

    # ── Preview ────────────────────────────────────────────────────────────

    def refresh_preview(self) -> Optional[PreviewResult]:
        """Regenerate the preview now, on the calling thread."""
        with self._lock:
            self._check_open()
            self._cancel_timer()
            self._generation += 1
            generation = self._generation
        self._run_preview(generation)
        return self.preview

    def wait_for_preview(self, timeout: Optional[float] = None) -> bool:
        """
        Block until the latest scheduled preview has been published.

        Returns:
            True if the preview is current, False on timeout
        """
        with self._published:
            return self._published.wait_for(
                lambda: self._published_generation >= self._generation,
                timeout=timeout,
            )

    def _schedule_preview(self) -> None:
        # Caller holds the lock
        self._cancel_timer()
        self._generation += 1
        generation = self._generation
        timer = threading.Timer(self.settings.debounce_s, self._run_preview, args=(generation,))
        timer.daemon = True
        self._timer = timer
        timer.start()
        logger.debug(f"Scheduled preview generation {generation}")

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _run_preview(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation or self._closed:
                logger.debug(f"Preview generation {generation} superseded before start")
                return
            aggregate = self._aggregate
            config = self._config

        try:
            result = generate_preview(
                aggregate,
                config,
                layout=self.layout,
                scale=self.settings.preview_scale,
                poster_provider=self._posters,
                airports=self.airports,
                clock=self.clock,
            )
            message = missing_input_reason(aggregate, config) if result is None else None
        except Exception as e:
            logger.error(f"Preview generation failed: {e}")
            result = None
            message = "Preview could not be generated."

        with self._lock:
            if generation != self._generation:
                logger.debug(f"Discarding stale preview generation {generation}")
                return
            self._preview = result
            self._empty_message = message
            self._published_generation = generation
            self._published.notify_all()

        if self.on_preview is not None:
            self.on_preview(result)

    def _publish_empty(self) -> None:
        with self._lock:
            self._published_generation = self._generation
            self._published.notify_all()
        if self.on_preview is not None:
            self.on_preview(None)

    # ── Export ─────────────────────────────────────────────────────────────

    def export(self, destination: Path) -> ExportResult:
        """
        Export the current selection synchronously.

        Args:
            destination: PDF path or directory

        Raises:
            ExportError: If the export fails
        """
        with self._lock:
            aggregate = self._aggregate
            config = self._config
        return self._export_snapshot(aggregate, config, destination)

    def submit_export(self, destination: Path) -> "Future[ExportResult]":
        """
        Export the current selection on the background worker.

        The configuration is captured now; later edits do not affect
        this export.
        """
        with self._lock:
            self._check_open()
            aggregate = self._aggregate
            config = self._config
        return self._executor.submit(self._export_snapshot, aggregate, config, destination)

    def _export_snapshot(
        self,
        aggregate: Optional[TourAggregate],
        config: ExportConfiguration,
        destination: Path,
    ) -> ExportResult:
        return export_document(
            aggregate,
            config,
            Path(destination),
            layout=self.layout,
            poster_provider=self._posters,
            airports=self.airports,
            clock=self.clock,
        )

    # ── Lifecycle ──────────────────────────────────────────────────────────

    def close(self) -> None:
        """Cancel pending previews and wait for running exports."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._cancel_timer()
            self._generation += 1
            self._published_generation = self._generation
            self._published.notify_all()
        self._executor.shutdown(wait=True)

    def __enter__(self) -> "ExportSession":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def _check_open(self) -> None:
        if self._closed:
            raise RuntimeError("ExportSession is closed")

    def _default_config(self, aggregate: Optional[TourAggregate]) -> ExportConfiguration:
        first_show = None
        if aggregate is not None and aggregate.shows:
            first_show = min(aggregate.shows, key=lambda s: s.date).id
        return ExportConfiguration(timezone=self.settings.timezone, selected_show_id=first_show)
