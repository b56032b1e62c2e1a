# tests/test_tiling.py

from PIL import Image

from rat.halftone.tiling import pages_bounding_box, scale_and_tile, tile_pages
from rat.models import Page


def test_right_edge_page_is_clipped_not_full_width():
    pages = tile_pages(120, 50, 2, 1, 100.0, 50.0)
    assert pages == [
        Page(x=0, y=0, width=100, height=50),
        Page(x=100, y=0, width=20, height=50),
    ]


def test_page_at_image_edge_is_omitted():
    pages = tile_pages(100, 50, 2, 1, 100.0, 50.0)
    assert pages == [Page(x=0, y=0, width=100, height=50)]


def test_pages_are_row_major():
    pages = tile_pages(200, 200, 2, 2, 100.0, 100.0)
    assert [(page.x, page.y) for page in pages] == [(0, 0), (100, 0), (0, 100), (100, 100)]
    assert all(page.width == 100 and page.height == 100 for page in pages)


def test_page_spans_never_exceed_paper():
    pages = tile_pages(1000, 1000, 3, 3, 597.6, 842.4)
    assert len(pages) <= 9
    for page in pages:
        assert page.width <= 597
        assert page.height <= 842


def test_fractional_paper_size_floors_origins():
    pages = tile_pages(1196, 100, 2, 1, 597.6, 100.0)
    assert [page.x for page in pages] == [0, 597]
    assert pages[1].width == 597


def test_narrow_image_drops_columns_past_its_edge():
    pages = tile_pages(10, 100, 3, 1, 100.0, 100.0)
    assert pages == [Page(x=0, y=0, width=10, height=100)]


def test_bounding_box_rounds_up():
    assert pages_bounding_box(2, 1, 597.6, 842.4) == (1196, 843)


def test_scale_and_tile(make_config):
    config = make_config(
        image=Image.new("RGB", (60, 30), (0, 0, 0)),
        paper_width_pixels=100.0,
        paper_height_pixels=72.0,
        pages_width=2,
        pages_height=2,
    )
    scaled, pages = scale_and_tile(config)
    assert scaled.size == (200, 100)
    assert scaled.mode == "RGBA"
    assert pages == [
        Page(x=0, y=0, width=100, height=72),
        Page(x=100, y=0, width=100, height=72),
        Page(x=0, y=72, width=100, height=28),
        Page(x=100, y=72, width=100, height=28),
    ]
    # source image is left alone
    assert config.image.size == (60, 30)
