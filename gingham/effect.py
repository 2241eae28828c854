import logging
from typing import Iterable, Optional, Tuple

from .pattern import PatternTile, StyleParameters, build_tile
from .rect import Rectangle
from .resample import render, split_rows
from .surface import Surface


logger = logging.getLogger(__name__)


class GinghamEffect:

    """
    Keeps the pattern tile for the current parameters and renders it on request.

    Whenever the parameters or geometry change, call set_render_info(). That builds
    a complete new tile (on the calling thread) which then replaces the old one; a
    tile is never modified once built, so renders that are still running on the
    old one are not disturbed. After that, render() can be called any number of
    times, e.g. once per region batch handed out by the host.
    """

    # Height of the row bands used by render_selection
    band_height = 64

    def __init__(self, executor=None):
        self.executor = executor
        self._tile: Optional[PatternTile] = None

    @property
    def tile(self) -> Optional[PatternTile]:
        return self._tile

    @property
    def params(self) -> Optional[StyleParameters]:
        return self._tile.params if self._tile else None

    @property
    def selection(self) -> Optional[Rectangle]:
        return self._tile.selection if self._tile else None

    def set_render_info(self, params: StyleParameters, selection: Rectangle,
                        canvas_size: Tuple[int, int]) -> PatternTile:
        tile = self._tile
        if (tile and tile.params == params and tile.selection == selection
                and tuple(tile.size) == tuple(canvas_size)):
            logger.debug("Parameters unchanged, keeping tile")
            return tile
        logger.debug("Building tile for %r in %r", params, selection)
        self._tile = build_tile(selection, canvas_size, params)
        return self._tile

    def invalidate(self):
        self._tile = None

    def render(self, dst: Surface, regions: Iterable[Rectangle], cancel=None) -> bool:
        tile = self._tile
        if tile is None:
            raise RuntimeError("No pattern tile; set_render_info() must be called before rendering.")
        # The tile is built in canvas coordinates, so it lines up with dst as is.
        return render(dst, tile, (0, 0), regions, cancel=cancel, executor=self.executor)

    def render_selection(self, dst: Surface, cancel=None) -> bool:
        "Render the whole selection, split up in bands so they can be done in parallel."
        selection = self.selection
        if selection is None:
            raise RuntimeError("No pattern tile; set_render_info() must be called before rendering.")
        return self.render(dst, split_rows(selection, self.band_height), cancel)
