"""Console front end: menu, board rendering and the single-player game."""

from __future__ import annotations

import argparse
import os
import subprocess
import sys
import time
from enum import IntEnum
from typing import Any, Optional, Sequence

from consoletris.block import BLOCK_COLORS, Block, Cell, Direction, make_board
from consoletris.instance import GameInstance

PLAYER = 2
BOARD_WIDTH = 100
BOARD_HEIGHT = 30

MAP_WIDTH = 12
MAP_HEIGHT = 23

X_OFFSET = 5
Y_OFFSET = 2

SPEED = 0.6

# Console colour numbers (blue bit first) mapped to ANSI colour numbers (red bit first).
_ANSI = (0, 4, 2, 6, 1, 5, 3, 7, 8, 12, 10, 14, 9, 13, 11, 15)

_BANNER = (
    "■■■  ■■■  ■■■  ■■■  ■■■  ■■■",
    " ■   ■     ■   ■  ■  ■   ■    ",
    " ■   ■■■   ■   ■■    ■   ■■■",
    " ■   ■     ■   ■  ■  ■     ■",
    " ■   ■■■   ■   ■  ■ ■■■  ■■■",
)

_MENU_ITEMS = ("1. SINGLE MODE", "2. LOCAL PVP MODE", "3. SERVER PVP MODE")
_PROMPT = "- Press any button -"


class Mode(IntEnum):
    """Game modes offered by the menu."""

    NORMAL = 0
    PVP_LOCAL = 1
    PVP_SERVER = 2


def render_border(width: int, height: int) -> list[str]:
    """Return the rows of a box-drawing frame of the given size."""
    inner = width - 2
    top = "┏" + "━" * inner + "┓"
    middle = "┃" + " " * inner + "┃"
    bottom = "┗" + "━" * inner + "┛"
    return [top] + [middle] * (height - 2) + [bottom]


def render_cell(piece: int, current_block: Optional[int]) -> tuple[Optional[Cell], str]:
    """Return the colour (None to keep the current one) and glyph for a board cell."""
    if piece == Cell.EMPTY:
        return Cell.WHITE, " "
    if piece == Cell.CUR_BLOCK:
        return BLOCK_COLORS[current_block], "■"
    if piece == Cell.SHADOW:
        return Cell.WHITE, "▨"
    if piece == Cell.PREV_BLOCK:
        return Cell.WHITE, "■"
    if piece == Cell.WALL:
        return Cell.WHITE, "□"
    if piece < Cell.EMPTY:
        return Cell(piece), "■"
    return None, "♬"


def _is_confirm(term: Any, key: Any) -> bool:
    return getattr(key, "code", None) == term.KEY_ENTER or str(key) in ("\r", "\n", " ")


class TetrisGame(GameInstance):
    """The full game driven through a blessed-style terminal."""

    def __init__(self, term: Any) -> None:
        super().__init__()
        self.term = term
        self.board: list[list[list[int]]] = []

    # --- output helpers ---------------------------------------------------

    def _write(self, text: str) -> None:
        stream = self.term.stream
        stream.write(text)
        stream.flush()

    def _at(self, x: int, y: int) -> str:
        if 0 <= x < BOARD_WIDTH and 0 <= y < BOARD_HEIGHT:
            return str(self.term.move_xy(x, y))
        return ""

    def _put(self, x: int, y: int, text: str) -> None:
        self._write(self._at(x, y) + text)

    def _color(self, color: int) -> str:
        return str(self.term.color(_ANSI[color & 0xF])) + str(self.term.on_color(0))

    def _clear(self) -> None:
        self._write(str(self.term.clear))

    # --- game setup -------------------------------------------------------

    def init_board(self) -> None:
        """Create an empty walled well for every player."""
        self.board = [make_board(MAP_HEIGHT, MAP_WIDTH) for _ in range(PLAYER)]

    def draw_border(self) -> None:
        """Draw the frame around the whole screen."""
        rows = render_border(BOARD_WIDTH, BOARD_HEIGHT)
        parts = [self._at(0, 0) + rows[0]]
        for y in range(1, BOARD_HEIGHT - 1):
            parts.append(self._at(0, y) + rows[y][0])
            parts.append(self._at(BOARD_WIDTH - 1, y) + rows[y][-1])
        parts.append(self._at(0, BOARD_HEIGHT - 1) + rows[-1])
        self._write("".join(parts))

    def draw_menu(self) -> Mode:
        """Show the title screen, then let the player pick a mode."""
        self.draw_border()
        for y, line in enumerate(_BANNER, start=7):
            self._put(15, y, line)

        while True:
            self._put(30, 20, _PROMPT)
            if self.term.inkey(timeout=0.4):
                break
            self._put(30, 20, " " * len(_PROMPT))
            if self.term.inkey(timeout=0.4):
                break

        selected = 0
        self._put(23, 15 + selected, "> ")
        for y, item in enumerate(_MENU_ITEMS, start=15):
            self._put(25, y, item)

        while True:
            key = self.term.inkey()
            if _is_confirm(self.term, key):
                return Mode(selected)
            self._put(23, 15 + selected, "  ")
            code = getattr(key, "code", None)
            if code == self.term.KEY_UP:
                selected = (selected - 1) % len(Mode)
            elif code == self.term.KEY_DOWN:
                selected = (selected + 1) % len(Mode)
            self._put(23, 15 + selected, "> ")

    def draw_board(self, x_offset: int, y_offset: int, player: int, block: Block) -> None:
        """Render one player's well at the given screen offset."""
        parts = []
        for i, row in enumerate(self.board[player]):
            for j, piece in enumerate(row):
                color, glyph = render_cell(piece, block.current_block)
                parts.append(self._at(x_offset + j * 2, y_offset + i))
                if color is not None:
                    parts.append(self._color(color))
                parts.append(glyph)
        self._write("".join(parts))

    # --- play -------------------------------------------------------------

    def single_game(self) -> int:
        """Play one single-player round until the stack tops out."""
        block = Block(self.board[0], 3)
        last_time = time.monotonic()

        while True:
            now = time.monotonic()
            self.draw_board(X_OFFSET, Y_OFFSET, 0, block)

            diff = now - last_time
            spawned = block.spawn()

            if diff > SPEED:
                self._put(0, 0, str(diff))
                block.move(Direction.DOWN)
                last_time = now

            key = self.term.inkey(timeout=0)
            if key:
                code = getattr(key, "code", None)
                if code == self.term.KEY_LEFT:
                    block.move(Direction.LEFT)
                elif code == self.term.KEY_RIGHT:
                    block.move(Direction.RIGHT)
                elif code == self.term.KEY_DOWN:
                    block.move(Direction.DOWN)
                elif code == self.term.KEY_UP:
                    block.rotate()
                elif str(key) == " ":
                    block.hard_drop()

            score = block.clear_lines()
            if score == -1 or not spawned:
                self._clear()
                break

            time.sleep(0.03)
        return 0

    def game_loop(self) -> None:
        """Reset the boards, show the menu and play the chosen mode."""
        self.init_board()
        self.draw_menu()
        self._clear()
        self.draw_border()
        # Every mode currently plays the single-player game.
        self.single_game()


def _prepare_console(stream: Any) -> None:
    if os.name == "nt":
        subprocess.run(
            ["cmd", "/c", f"mode con: cols={BOARD_WIDTH} lines={BOARD_HEIGHT}"],
            check=False,
        )
    else:
        stream.write(f"\x1b[8;{BOARD_HEIGHT};{BOARD_WIDTH}t")
        stream.flush()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Start the game in the current terminal."""
    parser = argparse.ArgumentParser(prog="consoletris", description="Falling-block puzzle game.")
    parser.parse_args(argv)

    from blessed import Terminal

    term = Terminal()
    _prepare_console(term.stream)
    game = TetrisGame(term)
    try:
        with term.fullscreen(), term.cbreak(), term.hidden_cursor():
            game.start()
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())