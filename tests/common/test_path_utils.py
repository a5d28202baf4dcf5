"""
Unit tests for filename sanitizing.
"""

import pytest

from encore_export.common.path_utils import sanitize_filename


class TestSanitizeFilename:
    """Tests for sanitize_filename()."""

    def test_when_reserved_chars_then_replaced(self):
        assert sanitize_filename("AC/DC - Power Up: Live.pdf") == "AC-DC - Power Up- Live.pdf"

    @pytest.mark.parametrize("name", ['a\\b', 'a*b', 'a?b', 'a"b', 'a<b', 'a>b', 'a|b'])
    def test_when_windows_reserved_then_dash(self, name):
        assert sanitize_filename(name) == "a-b"

    def test_when_whitespace_runs_then_collapsed(self):
        assert sanitize_filename("  The   Band\t- Leeds  ") == "The Band - Leeds"

    @pytest.mark.parametrize("name, expected", [
        ("Leeds\nO2 Academy.pdf", "Leeds O2 Academy.pdf"),
        ("Leeds\r\nO2 Academy.pdf", "Leeds O2 Academy.pdf"),
        ("Leeds\tO2\x0bAcademy", "Leeds O2 Academy"),
    ])
    def test_when_line_breaks_or_tabs_then_single_space(self, name, expected):
        assert sanitize_filename(name) == expected

    def test_when_other_control_chars_then_dash(self):
        assert sanitize_filename("Leeds\x00O2\x1bAcademy") == "Leeds-O2-Academy"

    def test_when_nothing_left_then_fallback(self):
        assert sanitize_filename("  ..  ") == "Export"
        assert sanitize_filename("", fallback="Tour") == "Tour"

    def test_when_unicode_then_kept(self):
        assert sanitize_filename("Sigur Rós – Reykjavík.pdf") == "Sigur Rós – Reykjavík.pdf"
