"""
Board Renderer

Draws a GameSession onto a Canvas: the guess grid, the keyboard hint panel
and, once a game is over, the status line.
"""

import textwrap
from typing import Dict, List

from ..config.game_settings import (
    CANVAS_HEIGHT, CANVAS_WIDTH, GRID_CELL_SIZE, GRID_CELL_SPACING, GRID_COLUMN_X,
    GRID_LETTER_INSET, GRID_ROWS_PER_COLUMN, GRID_TOP, HINTS_CHARS_PER_LINE,
    HINTS_LIST_OFFSET, HINTS_X, HINTS_Y, LINE_HEIGHT, STATUS_X, STATUS_Y, TEXT_SCALE
)
from ..models.game import GameSession, LetterResult, LetterState
from .canvas import Canvas
from .font import draw_text

WIN_MESSAGE = 'YOU WIN! SAY "PLAY AGAIN"'
LOSS_MESSAGE = 'WORD: {word}. SAY "NEW GAME"'

HINT_LABELS = (
    (LetterState.CORRECT, 'COR'),
    (LetterState.PRESENT, 'POS'),
    (LetterState.ABSENT, 'WRG'),
)


def render_board(session: GameSession, width: int = CANVAS_WIDTH, height: int = CANVAS_HEIGHT) -> Canvas:
    """Builds a fresh canvas showing the whole state of ``session``."""
    canvas = Canvas(width, height)
    draw_grid(canvas, session)
    draw_keyboard_hints(canvas, session)
    if session.is_over:
        draw_status(canvas, session)
    return canvas


def cell_origin(row: int, col: int) -> tuple:
    """Top-left pixel of a grid cell; the first rows sit left, the rest right."""
    block, block_row = divmod(row, GRID_ROWS_PER_COLUMN)
    start_x = GRID_COLUMN_X[min(block, len(GRID_COLUMN_X) - 1)]
    pitch = GRID_CELL_SIZE + GRID_CELL_SPACING
    return start_x + col * pitch, GRID_TOP + block_row * pitch


def draw_grid(canvas: Canvas, session: GameSession) -> None:
    for row_index, row in enumerate(session.guesses):
        for col, cell in enumerate(row):
            x, y = cell_origin(row_index, col)
            draw_cell(canvas, cell, x, y)


def draw_cell(canvas: Canvas, cell: LetterResult, x: int, y: int) -> None:
    """
    CORRECT cells are filled with the letter knocked out in black, PRESENT
    cells get a double border, everything else a single border.
    """
    size = GRID_CELL_SIZE
    text_x, text_y = x + GRID_LETTER_INSET, y + GRID_LETTER_INSET

    canvas.draw_rect(x, y, size, size, False, True)
    if cell.state == LetterState.PRESENT:
        canvas.draw_rect(x + 1, y + 1, size - 2, size - 2, False, True)
    if cell.letter:
        draw_text(canvas, cell.letter, text_x, text_y, TEXT_SCALE)
    if cell.state == LetterState.CORRECT:
        canvas.invert_region(x + 1, y + 1, size - 2, size - 2)


def group_keyboard_hints(keyboard_state: Dict[str, LetterState]) -> Dict[LetterState, List[str]]:
    """Known letters per state, each list sorted alphabetically."""
    groups: Dict[LetterState, List[str]] = {state: [] for state, _ in HINT_LABELS}
    for letter, state in keyboard_state.items():
        if state in groups:
            groups[state].append(letter)
    for letters in groups.values():
        letters.sort()
    return groups


def draw_keyboard_hints(canvas: Canvas, session: GameSession) -> None:
    draw_text(canvas, 'LETTERS:', HINTS_X, HINTS_Y, TEXT_SCALE)

    y = HINTS_Y + LINE_HEIGHT
    list_x = HINTS_X + HINTS_LIST_OFFSET
    groups = group_keyboard_hints(session.keyboard_state)

    for state, label in HINT_LABELS:
        letters = groups[state]
        if not letters:
            continue
        draw_text(canvas, label, HINTS_X, y, TEXT_SCALE)
        joined = ' '.join(letters)
        # Only the absent list can grow long enough to need wrapping
        lines = textwrap.wrap(joined, HINTS_CHARS_PER_LINE) if state == LetterState.ABSENT else [joined]
        for line in lines:
            draw_text(canvas, line, list_x, y, TEXT_SCALE)
            y += LINE_HEIGHT


def status_message(session: GameSession) -> str:
    if not session.is_over:
        return ''
    if session.won:
        return WIN_MESSAGE
    return LOSS_MESSAGE.format(word=session.target_word)


def draw_status(canvas: Canvas, session: GameSession) -> None:
    message = status_message(session)
    if message:
        draw_text(canvas, message, STATUS_X, STATUS_Y, TEXT_SCALE)
