"""
Share Module - Plain-text result card with an emoji path grid.
"""

from typing import List

from pathgame.game_session import GameSession
from pathgame.solver import Position

START_MARK = "🟢"
END_MARK = "🏁"
PATH_MARK = "🟦"
EMPTY_MARK = "⬜"

SHARE_URL = "https://nagusamecs.github.io/Path/"


def generate_emoji_grid(session: GameSession) -> str:
    """
    Draw the session's path as rows of emoji.

    Returns:
        One line per grid row
    """
    path = session.path
    visited = set(path)
    size = session.grid_size.size

    lines: List[str] = []
    for row in range(size):
        cells = []
        for col in range(size):
            pos = Position(row, col)
            if pos not in visited:
                cells.append(EMPTY_MARK)
            elif pos == path[0]:
                cells.append(START_MARK)
            elif pos == path[-1]:
                cells.append(END_MARK)
            else:
                cells.append(PATH_MARK)
        lines.append("".join(cells))
    return "\n".join(lines)


def generate_share_text(session: GameSession) -> str:
    """
    Build the shareable result text.

    Args:
        session: Session to describe

    Returns:
        Multi-line share text
    """
    grid_type = session.grid_size.display_name
    total_cells = session.grid_size.total_cells
    date = session.puzzle.date

    lines = []
    if session.is_perfect:
        lines.append(f"🧩 Path {grid_type} 🏆")
    else:
        lines.append(f"🧩 Path {grid_type}")
    lines.append(f"📅 {date.strftime('%b')} {date.day}, {date.year}")
    lines.append("")

    if session.is_perfect:
        lines.append(f"✨ Perfect: {session.path_length}/{total_cells}")
    else:
        lines.append(f"📊 Score: {session.path_length}/{total_cells} ({session.percentage}%)")

    if session.attempts == 1:
        lines.append("🎯 First try!")
    else:
        lines.append(f"🔄 Attempts: {session.attempts}")

    lines.append("")
    lines.append(generate_emoji_grid(session))
    lines.append("")
    lines.append(SHARE_URL)

    return "\n".join(lines)
