"""
Text rendering of board snapshots

Maps each tag to a single glyph; agents get a character derived from their id.
"""

import numpy as np
from typing import Dict, Optional

from arena.board import EMPTY, FIRST_AGENT_ID, FOOD, WALL


DEFAULT_GLYPHS = {
    EMPTY: ' ',
    WALL: '█',
    FOOD: 'M',
}

AGENT_GLYPHS = '23456789abcdefghijklmnopqrstuvwxyz'


def glyph_for(tag: int, glyphs: Optional[Dict[int, str]] = None) -> str:
    glyphs = DEFAULT_GLYPHS if glyphs is None else glyphs
    if tag in glyphs:
        return glyphs[tag]
    if tag >= FIRST_AGENT_ID:
        return AGENT_GLYPHS[(tag - FIRST_AGENT_ID) % len(AGENT_GLYPHS)]
    return '?'


def render_board(grid: np.ndarray, glyphs: Optional[Dict[int, str]] = None) -> str:
    """One line per board row"""
    return '\n'.join(
        ''.join(glyph_for(int(tag), glyphs) for tag in row)
        for row in grid
    )
