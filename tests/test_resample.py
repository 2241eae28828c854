from concurrent.futures import ThreadPoolExecutor
from threading import Event
import time

import numpy as np
import pytest

from gingham.brush import LineStyle
from gingham.pattern import StyleParameters, build_tile
from gingham.rect import Rectangle
from gingham.resample import clamp_regions, render, split_rows
from gingham.surface import Surface


PARAMS = StyleParameters(line_width=8, color=(30, 60, 90, 255),
                         horizontal_style=LineStyle.DIAGONAL_UP,
                         vertical_style=LineStyle.SOLID_33)


class CancelAfter:

    "Reports cancellation after a given number of checks."

    def __init__(self, checks):
        self.checks = checks
        self.calls = 0

    def is_set(self):
        self.calls += 1
        return self.calls > self.checks


class NoExecutor:

    def submit(self, *args, **kwargs):
        raise AssertionError("Executor should not be used")


@pytest.fixture
def tile():
    return build_tile(Rectangle((0, 0), (64, 48)), (64, 48), PARAMS)


def filled(size, value=7):
    s = Surface(size)
    s.data[:] = value
    return s


def test_integral_render_copies_tile(tile):
    dst = filled(tile.size)
    assert render(dst, tile, (0, 0), [dst.rect])
    assert np.array_equal(dst.data, tile.surface.data)


def test_only_regions_are_written(tile):
    dst = filled(tile.size)
    region = Rectangle((10, 12), (20, 9))
    render(dst, tile, (0, 0), [region])
    assert np.array_equal(dst.get_subimage(region), tile.surface.get_subimage(region))
    mask = np.ones(tile.size, dtype=bool)
    mask[region.as_slice()] = False
    assert (dst.data[mask] == 7).all()


def test_region_order_does_not_matter(tile):
    regions = split_rows(Rectangle((0, 0), (64, 48)), 5)
    dst1 = filled(tile.size)
    dst2 = filled(tile.size)
    render(dst1, tile, (0, 0), regions)
    render(dst2, tile, (0, 0), list(reversed(regions)))
    assert np.array_equal(dst1.data, dst2.data)


def test_parallel_render(tile):
    regions = split_rows(Rectangle((0, 0), (64, 48)), 4)
    dst = filled(tile.size)
    with ThreadPoolExecutor(max_workers=4) as executor:
        assert render(dst, tile, (0, 0), regions, executor=executor)
    assert np.array_equal(dst.data, tile.surface.data)


def test_parallel_cancel(tile):
    regions = split_rows(Rectangle((0, 0), (64, 48)), 4)
    dst = filled(tile.size)
    cancel = Event()
    cancel.set()
    with ThreadPoolExecutor(max_workers=4) as executor:
        assert not render(dst, tile, (0, 0), regions, cancel=cancel, executor=executor)
    assert (dst.data == 7).all()


def test_parallel_cancel_midway(tile):
    # Shared between workers, so only the first few rows overall get done.
    regions = split_rows(Rectangle((0, 0), (64, 48)), 4)
    dst = filled(tile.size)
    cancel = CancelAfter(3)
    with ThreadPoolExecutor(max_workers=1) as executor:
        assert not render(dst, tile, (0, 0), regions, cancel=cancel, executor=executor)
    done = Rectangle((0, 0), (64, 3))
    untouched = Rectangle((0, 3), (64, 45))
    assert np.array_equal(dst.get_subimage(done), tile.surface.get_subimage(done))
    assert (dst.get_subimage(untouched) == 7).all()


def test_parallel_error_waits_for_other_regions(tile):

    class BrokenSurface(Surface):
        def copy_region(self, source, rect, offset=(0, 0)):
            if rect.y == 0:
                raise RuntimeError("broken")
            time.sleep(0.001)
            super().copy_region(source, rect, offset)

    regions = split_rows(Rectangle((0, 0), (64, 48)), 4)
    dst = BrokenSurface(tile.size)
    dst.data[:] = 7
    with ThreadPoolExecutor(max_workers=2) as executor:
        with pytest.raises(RuntimeError):
            render(dst, tile, (0, 0), regions, executor=executor)
        rest = Rectangle((0, 4), (64, 44))
        # Checked before the executor shuts down, so nothing is still writing.
        assert np.array_equal(dst.get_subimage(rest), tile.surface.get_subimage(rest))


def test_no_parallel_without_disjoint_writes(tile):

    class SharedSurface(Surface):
        disjoint_writes = False

    dst = SharedSurface(tile.size)
    regions = split_rows(dst.rect, 10)
    assert render(dst, tile, (0, 0), regions, executor=NoExecutor())
    assert np.array_equal(dst.data, tile.surface.data)


def test_offset_origin(tile):
    dst = filled((80, 60))
    render(dst, tile, (5, 3), [dst.rect])
    assert dst[20, 20] == tile.surface[15, 17]
    # Clamped at the edges of the tile
    assert dst[0, 10] == tile.surface[0, 7]
    assert dst[79, 59] == tile.surface[63, 47]


def test_fractional_origin():
    src = Surface((2, 1))
    src[0, 0] = (0, 0, 0, 255)
    src[1, 0] = (100, 200, 50, 255)
    dst = filled((3, 1))
    render(dst, src, (0.5, 0), [dst.rect])
    assert dst[0, 0] == (0, 0, 0, 255)
    assert dst[1, 0] == (50, 100, 25, 255)
    assert dst[2, 0] == (100, 200, 50, 255)


def test_cancel_midway(tile):
    region = Rectangle((4, 6), (30, 10))
    k = 4
    dst = filled(tile.size)
    cancel = CancelAfter(k + 1)
    assert not render(dst, tile, (0, 0), [region], cancel=cancel)
    done = Rectangle((4, 6), (30, k + 1))
    untouched = Rectangle((4, 6 + k + 1), (30, 10 - k - 1))
    assert np.array_equal(dst.get_subimage(done), tile.surface.get_subimage(done))
    assert (dst.get_subimage(untouched) == 7).all()


def test_cancel_before_start(tile):
    dst = filled(tile.size)
    cancel = Event()
    cancel.set()
    assert not render(dst, tile, (0, 0), [dst.rect], cancel=cancel)
    assert (dst.data == 7).all()


def test_cancel_not_set(tile):
    dst = filled(tile.size)
    assert render(dst, tile, (0, 0), [dst.rect], cancel=Event())


def test_regions_are_clamped(tile):
    dst = filled(tile.size)
    assert render(dst, tile, (0, 0), [Rectangle((60, 40), (50, 50))])
    clamped = Rectangle((60, 40), (4, 8))
    assert np.array_equal(dst.get_subimage(clamped), tile.surface.get_subimage(clamped))


def test_nothing_to_do(tile):
    dst = filled(tile.size)
    assert render(dst, tile, (0, 0), [])
    assert render(dst, tile, (0, 0), [Rectangle((3, 3), (0, 5))])
    assert (dst.data == 7).all()


def test_clamp_regions():
    dst = Surface((10, 10))
    regions = [Rectangle((-5, 0), (10, 5)), Rectangle((20, 20), (5, 5)), Rectangle((1, 1), (2, 2))]
    assert clamp_regions(dst, regions) == [Rectangle((0, 0), (5, 5)), Rectangle((1, 1), (2, 2))]


def test_split_rows():
    bands = split_rows(Rectangle((3, 0), (10, 130)), 64)
    assert [b.size for b in bands] == [(10, 64), (10, 64), (10, 2)]
    assert [b.y for b in bands] == [0, 64, 128]
    assert split_rows(Rectangle((0, 0), (10, 0)), 64) == []
