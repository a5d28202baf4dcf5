"""
Unit tests for ExportConfiguration.
"""

import pytest
from dataclasses import FrozenInstanceError
from datetime import date

from encore_export.export import CoverTheme, ExportConfiguration, Preset


class TestExportConfiguration:
    """Tests for the configuration value."""

    def test_defaults(self):
        config = ExportConfiguration()

        assert config.preset == Preset.SHOW
        assert config.include_notes is True
        assert config.notes == ""
        assert config.cover_theme == CoverTheme.THEME_1
        assert config.selected_show_id is None
        assert config.timezone == "UTC"

    def test_when_changed_then_original_untouched(self):
        config = ExportConfiguration()

        updated = config.with_changes(notes="Bus at 9", preset=Preset.TRAVEL)

        assert updated.notes == "Bus at 9"
        assert updated.preset == Preset.TRAVEL
        assert config.notes == ""

    def test_when_unknown_field_then_type_error(self):
        with pytest.raises(TypeError):
            ExportConfiguration().with_changes(colour="red")

    def test_when_assigned_then_frozen(self):
        with pytest.raises(FrozenInstanceError):
            ExportConfiguration().notes = "x"

    def test_when_equal_fields_then_equal_values(self):
        assert ExportConfiguration(notes="a") == ExportConfiguration(notes="a")


class TestIncludesDay:
    """Tests for ExportConfiguration.includes_day()."""

    def test_when_open_range_then_every_day(self):
        assert ExportConfiguration().includes_day(date(1999, 1, 1))

    def test_when_bounded_then_inclusive(self):
        config = ExportConfiguration(
            date_range_start=date(2025, 6, 18),
            date_range_end=date(2025, 6, 20),
        )

        assert config.includes_day(date(2025, 6, 18))
        assert config.includes_day(date(2025, 6, 20))
        assert not config.includes_day(date(2025, 6, 17))
        assert not config.includes_day(date(2025, 6, 21))

    def test_when_only_start_then_open_ended(self):
        config = ExportConfiguration(date_range_start=date(2025, 6, 18))

        assert config.includes_day(date(2030, 1, 1))
        assert not config.includes_day(date(2025, 6, 17))


class TestPreset:
    """Tests for Preset."""

    def test_when_single_show_preset_then_needs_show(self):
        assert Preset.SHOW.needs_show
        assert Preset.GUEST_LIST.needs_show
        assert not Preset.TRAVEL.needs_show
        assert not Preset.FULL_TOUR.needs_show

    def test_values_match_display_names(self):
        assert Preset("Full Tour") is Preset.FULL_TOUR
        assert Preset("Tour Overview") is Preset.TOUR_OVERVIEW
