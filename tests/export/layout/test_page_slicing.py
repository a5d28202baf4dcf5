"""
Unit tests for the paginator: page counts, boundaries and slicing.
"""

import math
import pytest
from unittest.mock import patch

from PIL import Image, ImageOps

from encore_export.export.layout import (
    LayoutConfig,
    RenderedDocument,
    compute_page_count,
    page_boundary,
    paginate,
    slice_bounds,
)
from encore_export.export.layout import paginator as paginator_module


WIDTH = 12


def make_canvas(height: int) -> Image.Image:
    """Canvas whose pixel colour encodes its row number."""
    data = bytearray()
    for row in range(height):
        data.extend(bytes((row % 256, (row // 256) % 256, 7)) * WIDTH)
    return Image.frombytes("RGB", (WIDTH, height), bytes(data))


def layout_for(page_height: float) -> LayoutConfig:
    return LayoutConfig(page_width=100, page_height=page_height, scale=1.0, margin=0)


def reassemble(pages) -> bytes:
    """Concatenate the content rows of every page."""
    out = bytearray()
    for page in pages:
        if page.content_height:
            out.extend(page.image.crop((0, 0, WIDTH, page.content_height)).tobytes())
    return bytes(out)


class TestComputePageCount:
    """Tests for compute_page_count()."""

    @pytest.mark.parametrize("height, expected", [
        (0, 1),
        (1, 1),
        (842, 1),
        (843, 2),
        (3 * 842, 3),
        (3 * 842 + 1, 4),
    ])
    def test_page_count(self, height, expected):
        assert compute_page_count(height, 842) == expected

    def test_when_fractional_page_height_then_ceil(self):
        assert compute_page_count(1263, 1263.0) == 1
        assert compute_page_count(1264, 1263.0) == 2
        assert compute_page_count(100, 33.5) == 3

    def test_when_page_height_not_positive_then_raises(self):
        with pytest.raises(ValueError):
            compute_page_count(10, 0)

    def test_when_height_negative_then_raises(self):
        with pytest.raises(ValueError):
            compute_page_count(-1, 842)


class TestSliceBounds:
    """Tests for slice_bounds() and page_boundary()."""

    def test_when_integer_page_height_then_contiguous(self):
        assert slice_bounds(2000, 842) == [(0, 842), (842, 1684), (1684, 2000)]

    def test_when_fractional_page_height_then_floored_boundaries(self):
        bounds = slice_bounds(100, 33.5)

        assert bounds == [(0, 33), (33, 67), (67, 100)]

    @pytest.mark.parametrize("height, page_height", [
        (0, 842),
        (1, 842),
        (5000, 842),
        (4211, 1263.0),
        (997, 37.5),
        (1000, 33.3),
    ])
    def test_bounds_cover_every_row_once(self, height, page_height):
        bounds = slice_bounds(height, page_height)

        assert bounds[0][0] == 0
        assert bounds[-1][1] == height
        for (_, prev_bottom), (top, _) in zip(bounds, bounds[1:]):
            assert top == prev_bottom
        assert all(bottom - top <= math.ceil(page_height) for top, bottom in bounds)

    def test_page_boundary(self):
        assert page_boundary(0, 37.5) == 0
        assert page_boundary(1, 37.5) == 37
        assert page_boundary(2, 37.5) == 75


class TestPaginate:
    """Tests for paginate()."""

    @pytest.mark.parametrize("height, page_height", [
        (50, 50),
        (150, 50),
        (151, 50),
        (100, 33.5),
        (997, 37.5),
    ])
    def test_when_sliced_then_reconstructs_canvas_exactly(self, height, page_height):
        canvas = make_canvas(height)
        document = RenderedDocument(image=canvas, scale=1.0)

        result = paginate(document, layout_for(page_height))

        assert result.page_count == compute_page_count(height, page_height)
        assert len(result.pages) == result.page_count
        assert reassemble(result.pages) == canvas.tobytes()

    def test_when_three_pages_exactly_then_three_full_pages(self):
        result = paginate(RenderedDocument(make_canvas(150), scale=1.0), layout_for(50))

        assert result.page_count == 3
        assert [p.content_height for p in result.pages] == [50, 50, 50]

    def test_when_one_row_past_three_pages_then_four_pages(self):
        result = paginate(RenderedDocument(make_canvas(151), scale=1.0), layout_for(50))

        assert result.page_count == 4
        assert result.pages[-1].content_height == 1

    def test_every_page_has_fixed_size(self):
        result = paginate(RenderedDocument(make_canvas(997), scale=1.0), layout_for(37.5))

        for page in result.pages:
            assert page.image.size == (WIDTH, 38)

    def test_when_last_page_short_then_rest_is_blank(self):
        result = paginate(RenderedDocument(make_canvas(60), scale=1.0), layout_for(50))

        last = result.pages[-1]
        blank = last.image.crop((0, last.content_height, WIDTH, last.image.height))
        assert blank.getcolors() == [(WIDTH * (50 - 10), (255, 255, 255))]

    def test_when_canvas_empty_then_single_blank_page(self):
        result = paginate(RenderedDocument(Image.new("RGB", (WIDTH, 0)), scale=1.0), layout_for(50))

        assert result.page_count == 1
        assert result.pages[0].content_height == 0
        assert result.pages[0].image.getcolors() == [(WIDTH * 50, (255, 255, 255))]

    def test_when_document_scale_differs_then_page_height_scaled(self):
        layout = LayoutConfig(page_width=100, page_height=25, scale=1.0, margin=0)

        result = paginate(RenderedDocument(make_canvas(100), scale=2.0), layout)

        assert result.page_count == 2
        assert result.pages[0].image.height == 50

    def test_when_origin_bottom_then_flipped_before_slicing(self):
        canvas = make_canvas(120)
        stored_bottom_up = ImageOps.flip(canvas)
        document = RenderedDocument(image=stored_bottom_up, scale=1.0, origin="bottom")

        result = paginate(document, layout_for(50))

        assert reassemble(result.pages) == canvas.tobytes()
        assert result.pages[0].image.getpixel((0, 0)) == (0, 0, 7)

    def test_when_page_fails_to_slice_then_skipped_and_others_kept(self):
        real_slice = paginator_module._slice_page
        calls = []

        def flaky(source, top, bottom, width, height):
            calls.append(top)
            if len(calls) == 2:
                raise MemoryError("out of memory")
            return real_slice(source, top, bottom, width, height)

        with patch.object(paginator_module, "_slice_page", side_effect=flaky):
            result = paginate(RenderedDocument(make_canvas(150), scale=1.0), layout_for(50))

        assert result.page_count == 3
        assert [p.index for p in result.pages] == [0, 2]
        assert result.skipped == (1,)
        assert not result.is_complete
        assert "Skipped page 2" in result.warnings[0]


class TestRenderedDocument:
    """Tests for RenderedDocument validation."""

    def test_when_origin_invalid_then_raises(self):
        with pytest.raises(ValueError, match="origin"):
            RenderedDocument(make_canvas(1), scale=1.0, origin="left")

    def test_when_scale_not_positive_then_raises(self):
        with pytest.raises(ValueError, match="scale"):
            RenderedDocument(make_canvas(1), scale=0)
