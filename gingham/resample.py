"""
Copying a finished pattern tile into a destination surface.

The destination is processed as a number of rectangular regions. Regions don't
depend on each other, so given an executor they are spread over several worker
threads. All workers read the same tile, which must not change while rendering.

Rendering can be cancelled. The signal is checked before each row, so a
cancelled render leaves the rows already done in place and the rest untouched.
"""

from concurrent.futures import wait
import logging
from typing import Iterable, List, Tuple

import numpy as np

from .rect import Rectangle
from .surface import Surface


logger = logging.getLogger(__name__)


def _is_cancelled(cancel) -> bool:
    return cancel is not None and cancel.is_set()


def clamp_regions(dst: Surface, regions: Iterable[Rectangle]) -> List[Rectangle]:
    "Restrict the regions to the destination, dropping any that end up empty."
    bounds = dst.rect
    result = []
    for region in regions:
        clamped = bounds.intersect(region)
        if clamped != region and region:
            logger.warning("Region %r is outside the destination %r, clamped to %r",
                           region, bounds, clamped)
        if clamped:
            result.append(clamped)
    return result


def split_rows(rect: Rectangle, height: int) -> List[Rectangle]:
    "Cut a rectangle into horizontal bands of at most the given height."
    x, y = rect.position
    w, h = rect.size
    return [Rectangle((x, y + top), (w, min(height, h - top)))
            for top in range(0, h, height)]


def render_region(dst: Surface, tile: Surface, origin: Tuple[float, float],
                  region: Rectangle, cancel=None) -> bool:
    """
    Fill one region of dst with tile samples, dst[x, y] = tile(x - ox, y - oy).
    Returns False if cancelled before all rows were done.
    """
    ox, oy = origin
    xs = np.arange(region.x, region.right)
    tw, th = tile.size
    integral = float(ox).is_integer() and float(oy).is_integer()

    if integral:
        ox, oy = int(ox), int(oy)
        source = region.offset(-ox, -oy)
        inside = tile.rect.contains(source)
        width = region.width
        columns = np.clip(xs - ox, 0, tw - 1)

    for y in range(region.y, region.bottom):
        if _is_cancelled(cancel):
            logger.info("Render cancelled at row %d of %r", y, region)
            return False
        if integral:
            # Sampling at whole pixels is just copying, no need to interpolate.
            if inside:
                dst.copy_region(tile, Rectangle((region.x, y), (width, 1)), (ox, oy))
            else:
                v = min(max(y - oy, 0), th - 1)
                dst.data[region.x:region.right, y] = tile.data[columns, v]
        else:
            dst.data[region.x:region.right, y] = tile.sample_bilinear(xs - ox, y - oy)
    return True


def render(dst: Surface, tile, origin: Tuple[float, float], regions: Iterable[Rectangle],
           cancel=None, executor=None) -> bool:
    """
    Render the tile into each of the regions of dst.

    The tile may be a PatternTile or a plain Surface. The origin is where the tile's
    top left corner sits in destination coordinates; it may be fractional.
    The cancel argument is anything with an is_set() method, e.g. a threading.Event.
    If an executor is given, and the destination allows it, regions are rendered
    concurrently.

    Returns True if everything was rendered, False if cancelled.
    """
    source = getattr(tile, "surface", tile)
    regions = clamp_regions(dst, regions)
    if not regions:
        return True
    w, h = source.size
    if w == 0 or h == 0:
        logger.debug("Empty tile, nothing to render")
        return True

    logger.debug("Rendering %d regions with origin %r", len(regions), origin)
    if executor is not None and dst.disjoint_writes and len(regions) > 1:
        futures = [executor.submit(render_region, dst, source, origin, region, cancel)
                   for region in regions]
        # Let every region finish before result() re-raises a worker error.
        wait(futures)
        return all([future.result() for future in futures])

    for region in regions:
        if not render_region(dst, source, origin, region, cancel):
            return False
    return True
