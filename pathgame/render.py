"""
Render Utilities

Functions for drawing a puzzle board and a path to a PNG image, and for
managing timestamped debug renders.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence, Union

from PIL import Image, ImageDraw, ImageFont

from pathgame.solver import BoardState, Position

logger = logging.getLogger(__name__)


# Debug settings
DEBUG_DIR = Path("./debug")
MAX_DEBUG_IMAGES = 10

DEFAULT_CELL_SIZE = 64
MARGIN = 16

BACKGROUND = "#FFFFFF"
GRID_LINE = "#B0BEC5"
TEXT_COLOR = "#263238"
START_FILL = "#A5D6A7"
PATH_FILL = "#BBDEFB"
END_FILL = "#FFE082"
PATH_LINE = "#1E88E5"

# Cell value -> fill for unvisited cells
VALUE_COLORS = {
    1: "#F5F5F5",
    2: "#EEEEEE",
    3: "#E0E0E0",
    4: "#D6D6D6",
    5: "#CCCCCC",
}


def _load_font(size: int):
    """Try to load a TrueType font, fall back to the default bitmap font."""
    try:
        return ImageFont.truetype("arial.ttf", size)
    except OSError:
        return ImageFont.load_default()


def cell_center(row: int, col: int, cell_size: int) -> tuple:
    """Pixel center of a cell."""
    return (
        MARGIN + col * cell_size + cell_size // 2,
        MARGIN + row * cell_size + cell_size // 2,
    )


def render_puzzle(
    board: BoardState,
    path: Optional[Sequence[Position]] = None,
    cell_size: int = DEFAULT_CELL_SIZE
) -> Image.Image:
    """
    Draw a board with an optional path.

    Annotations include:
    - Cell values
    - Start cell (green), path cells (blue), end cell (amber)
    - Path polyline through cell centers

    Args:
        board: Board to draw
        path: Path to highlight, start first
        cell_size: Cell edge in pixels

    Returns:
        RGB PIL Image
    """
    if cell_size <= 0:
        raise ValueError(f"cell_size must be positive, got {cell_size}")

    width = board.cols * cell_size + 2 * MARGIN
    height = board.rows * cell_size + 2 * MARGIN
    image = Image.new("RGB", (width, height), BACKGROUND)
    draw = ImageDraw.Draw(image)
    font = _load_font(max(10, cell_size // 3))

    path = list(path or [])
    on_path = set(path)

    for pos in board.positions():
        x0 = MARGIN + pos.col * cell_size
        y0 = MARGIN + pos.row * cell_size
        if path and pos == path[0]:
            fill = START_FILL
        elif path and pos == path[-1]:
            fill = END_FILL
        elif pos in on_path:
            fill = PATH_FILL
        else:
            fill = VALUE_COLORS.get(board.value_at(pos), BACKGROUND)
        draw.rectangle([x0, y0, x0 + cell_size, y0 + cell_size], fill=fill, outline=GRID_LINE, width=2)

    if len(path) > 1:
        points = [cell_center(p.row, p.col, cell_size) for p in path]
        draw.line(points, fill=PATH_LINE, width=max(2, cell_size // 12))

    for pos in board.positions():
        cx, cy = cell_center(pos.row, pos.col, cell_size)
        text = str(board.value_at(pos))
        left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
        draw.text((cx - (right - left) / 2 - left, cy - (bottom - top) / 2 - top), text, fill=TEXT_COLOR, font=font)

    return image


def save_puzzle_image(
    board: BoardState,
    output: Union[str, Path],
    path: Optional[Sequence[Position]] = None,
    cell_size: int = DEFAULT_CELL_SIZE
) -> Path:
    """
    Render a board and save it as PNG.

    Returns:
        Path of the written file
    """
    output = Path(output)
    output.parent.mkdir(parents=True, exist_ok=True)
    render_puzzle(board, path, cell_size).save(output, "PNG")
    logger.info(f"Puzzle image saved: {output}")
    return output


def save_debug_image(board: BoardState, path: Optional[Sequence[Position]] = None) -> Path:
    """
    Save a timestamped render to DEBUG_DIR, keeping only recent files.

    Returns:
        Path of the written file
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")[:-3]
    filepath = save_puzzle_image(board, DEBUG_DIR / f"debug_{timestamp}.png", path)
    _cleanup_debug_images()
    return filepath


def _cleanup_debug_images() -> None:
    """Remove old debug images, keeping only the most recent MAX_DEBUG_IMAGES."""
    if not DEBUG_DIR.exists():
        return

    # Get all debug images sorted by modification time
    debug_files = sorted(
        DEBUG_DIR.glob("debug_*.png"),
        key=lambda p: p.stat().st_mtime,
        reverse=True
    )

    for old_file in debug_files[MAX_DEBUG_IMAGES:]:
        try:
            old_file.unlink()
        except OSError as e:
            logger.warning(f"Could not remove old debug image {old_file}: {e}")
