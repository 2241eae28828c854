__version__ = '0.1.0'

from argparse import ArgumentParser, ArgumentTypeError
from concurrent.futures import ThreadPoolExecutor
import logging
import os
import re

from .brush import LineStyle
from .pattern import MIN_LINE_WIDTH, MAX_LINE_WIDTH, StyleParameters
from .rect import Rectangle
from .util import WHITE, parse_color


logger = logging.getLogger(__name__)


def parse_canvas_spec(spec):
    m = re.match(r"@(\d+)x(\d+)$", spec)
    if m:
        width = int(m.group(1))
        height = int(m.group(2))
        if width == 0 or height == 0:
            raise ArgumentTypeError(f"Canvas size must not be zero, got '{spec}'.")
        return width, height
    elif os.path.exists(spec):
        return spec
    raise ArgumentTypeError(f"Could not understand '{spec}' as canvas specification. "
                            "It should be either a valid filename or something like '@WxH'.")


def parse_selection(spec):
    m = re.match(r"(\d+),(\d+),(\d+),(\d+)$", spec.replace(" ", ""))
    if not m:
        raise ArgumentTypeError(f"Selection should be given as X,Y,W,H, not '{spec}'.")
    x, y, w, h = (int(v) for v in m.groups())
    return Rectangle((x, y), (w, h))


def parse_line_width(spec):
    try:
        width = int(spec)
    except ValueError:
        raise ArgumentTypeError(f"Line width must be an integer, not '{spec}'.")
    if not MIN_LINE_WIDTH <= width <= MAX_LINE_WIDTH:
        raise ArgumentTypeError(f"Line width must be between {MIN_LINE_WIDTH} and {MAX_LINE_WIDTH}.")
    return width


def parse_style(spec):
    try:
        return LineStyle.from_string(spec)
    except (KeyError, ValueError):
        names = ", ".join(s.name.lower() for s in LineStyle)
        raise ArgumentTypeError(f"Unknown style '{spec}', pick one of {names}.")


def parse_workers(spec):
    try:
        workers = int(spec)
    except ValueError:
        raise ArgumentTypeError(f"Number of workers must be an integer, not '{spec}'.")
    if workers < 1:
        raise ArgumentTypeError("Number of workers must be at least 1.")
    return workers


def parse_color_arg(spec):
    try:
        return parse_color(spec)
    except ValueError as e:
        raise ArgumentTypeError(str(e))


def make_parser():
    styles = "; ".join(f"{s.name.lower()}: {s.label}" for s in LineStyle)
    parser = ArgumentParser(prog="gingham",
                            description="Render a gingham pattern into an image.")
    parser.add_argument("canvas", type=parse_canvas_spec,
                        help="PNG file to draw on, or @WxH for a new white canvas.")
    parser.add_argument("-o", "--output", required=True, help="Where to save the PNG result.")
    parser.add_argument("-s", "--selection", type=parse_selection,
                        help="Area to fill, as X,Y,W,H. Defaults to the whole canvas.")
    parser.add_argument("-w", "--line-width", type=parse_line_width)
    parser.add_argument("-c", "--color", type=parse_color_arg,
                        help="Line color, e.g. '#1060c0' or '16,96,192'.")
    parser.add_argument("--horizontal", type=parse_style, help=f"Horizontal line style ({styles}).")
    parser.add_argument("--vertical", type=parse_style, help="Vertical line style.")
    parser.add_argument("--workers", type=parse_workers, help="Number of render threads.")
    return parser


def make_params(args, defaults: StyleParameters) -> StyleParameters:
    return StyleParameters(
        line_width=args.line_width or defaults.line_width,
        color=args.color or defaults.color,
        horizontal_style=defaults.horizontal_style if args.horizontal is None else args.horizontal,
        vertical_style=defaults.vertical_style if args.vertical is None else args.vertical,
    )


def run(argv=None):
    from .config import load_config
    from .effect import GinghamEffect
    from .image import load_png, save_png
    from .surface import Surface

    args = make_parser().parse_args(argv)
    config = load_config()
    params = make_params(args, config["default_params"])

    if isinstance(args.canvas, tuple):
        dst = Surface(args.canvas)
        dst.fill(WHITE)
    else:
        dst = load_png(args.canvas)
    selection = args.selection or dst.rect

    with ThreadPoolExecutor(max_workers=config["workers"] if args.workers is None else args.workers) as executor:
        effect = GinghamEffect(executor=executor)
        effect.set_render_info(params, selection, dst.size)
        effect.render_selection(dst)

    save_png(dst, args.output)
    logger.info("Saved %r to %s", dst, args.output)
