"""Falling-piece mechanics for a single well: spawning, moving, rotating and clearing."""

from __future__ import annotations

import random
from collections import deque
from enum import Enum, IntEnum
from typing import Iterator, Optional, Protocol, Sequence

Offsets = tuple[tuple[int, int], ...]


class Cell(IntEnum):
    """Contents of one board cell; values below ``EMPTY`` are solid."""

    BLACK = 0
    DARKBLUE = 1
    DARKGREEN = 2
    DARKCYAN = 3
    DARKRED = 4
    DARKMAGENTA = 5
    DARKYELLOW = 6
    GRAY = 7
    DARKGRAY = 8
    BLUE = 9
    GREEN = 10
    CYAN = 11
    RED = 12
    MAGENTA = 13
    YELLOW = 14
    WHITE = 15
    WALL = 99
    EMPTY = 100
    CUR_BLOCK = 101
    SHADOW = 102
    PREV_BLOCK = 103


class Shape(Enum):
    """Which form of the current piece a collision test looks at."""

    ORIGINAL = 0
    ROTATE = 1
    MOV = 2


class Direction(Enum):
    """Movement directions, valued by their (dy, dx) offset."""

    UP = (-1, 0)
    DOWN = (1, 0)
    LEFT = (0, -1)
    RIGHT = (0, 1)


# Offsets (dy, dx) from the pivot; the pivot is always the first entry.
BLOCKS: tuple[Offsets, ...] = (
    ((0, 0), (0, -1), (0, 1), (0, 2)),     # I
    ((0, 0), (0, -1), (-1, -1), (0, 1)),   # J
    ((0, 0), (0, -1), (0, 1), (-1, 1)),    # L
    ((0, 0), (-1, 0), (-1, 1), (0, 1)),    # O
    ((0, 0), (0, -1), (-1, 0), (-1, 1)),   # S
    ((0, 0), (0, 1), (-1, 0), (-1, -1)),   # Z
    ((0, 0), (-1, 0), (0, 1), (0, -1)),    # T
)

BLOCK_COLORS: tuple[Cell, ...] = (
    Cell.CYAN,
    Cell.BLUE,
    Cell.DARKYELLOW,
    Cell.YELLOW,
    Cell.GREEN,
    Cell.MAGENTA,
    Cell.RED,
)

O_PIECE = 3
SPAWN_Y = 2
SPAWN_X = 5
GAME_OVER_ROW = 2


class _Rng(Protocol):
    def randrange(self, stop: int) -> int: ...


def make_board(height: int, width: int) -> list[list[int]]:
    """Return an empty well with walls on both sides and along the bottom."""
    board = [[Cell.EMPTY] * width for _ in range(height)]
    for row in board:
        row[0] = Cell.WALL
        row[-1] = Cell.WALL
    board[-1] = [Cell.WALL] * width
    return board


def _rotated(offsets: Sequence[tuple[int, int]]) -> Offsets:
    return tuple((-dx, dy) for dy, dx in offsets)


class Block:
    """Controls the falling piece on one board, which it edits in place."""

    def __init__(
        self,
        board: list[list[int]],
        max_size: int = 3,
        rng: Optional[_Rng] = None,
    ) -> None:
        self.board = board
        self.max_size = max_size
        self._rng = rng if rng is not None else random.Random()
        self._queue: deque[int] = deque()
        for _ in range(max_size):
            self.enqueue_block()

        self.on_board = False
        self.y = SPAWN_Y
        self.x = SPAWN_X
        self.shape: Offsets = BLOCKS[0]
        self._current: Optional[int] = None

        self._line_bits = [0] * len(board)
        width = len(board[0])
        self._full_mask = (1 << (width - 1)) - 2

    # --- queue of upcoming pieces -------------------------------------

    def enqueue_block(self) -> None:
        """Append a random piece to the queue of upcoming pieces."""
        self._queue.append(self._rng.randrange(len(BLOCKS)))

    def pop_block(self) -> int:
        """Remove and return the next piece; IndexError if the queue is empty."""
        return self._queue.popleft()

    def peek_block(self) -> int:
        """Return the next piece without removing it."""
        return self._queue[0]

    @property
    def current_block(self) -> Optional[int]:
        """Index of the piece last placed on the board."""
        return self._current

    # --- geometry helpers ---------------------------------------------

    def _cells(self, y: Optional[int] = None, shape: Optional[Offsets] = None) -> Iterator[tuple[int, int]]:
        base_y = self.y if y is None else y
        for dy, dx in self.shape if shape is None else shape:
            yield base_y + dy, self.x + dx

    def _blocked(self, y: int, x: int) -> bool:
        if not (0 <= y < len(self.board) and 0 <= x < len(self.board[y])):
            return True
        return self.board[y][x] < Cell.EMPTY

    def _paint(self, value: int, y: Optional[int] = None) -> None:
        for cy, cx in self._cells(y):
            self.board[cy][cx] = value

    def _landing_row(self) -> int:
        y = self.y
        dy, dx = Direction.DOWN.value
        while not any(self._blocked(cy + dy, cx + dx) for cy, cx in self._cells(y)):
            y += 1
        return y

    def _lock(self) -> None:
        color = BLOCK_COLORS[self._current]
        for cy, cx in self._cells():
            self.board[cy][cx] = color
            self.record_line(cy, cx)

    # --- piece operations ---------------------------------------------

    def is_collision(self, shape: Shape, dy: int = 0, dx: int = 0) -> bool:
        """Tell whether the current piece, in the given form, overlaps something solid."""
        if shape is Shape.ORIGINAL:
            cells = self._cells()
        elif shape is Shape.ROTATE:
            cells = self._cells(shape=_rotated(self.shape))
        else:
            cells = ((cy + dy, cx + dx) for cy, cx in self._cells())
        return any(self._blocked(cy, cx) for cy, cx in cells)

    def spawn(self) -> bool:
        """Place the next queued piece; False only when its spawn spot is taken."""
        if self.on_board:
            return True
        self.y, self.x = SPAWN_Y, SPAWN_X
        self.shape = BLOCKS[self.peek_block()]
        if self.is_collision(Shape.ORIGINAL):
            return False
        self._current = self.pop_block()
        self.enqueue_block()
        self._paint(Cell.CUR_BLOCK)
        self.on_board = True
        self.make_shadow()
        return True

    def rotate(self) -> None:
        """Turn the piece a quarter turn about its pivot if there is room."""
        if not self.on_board or self._current == O_PIECE:
            return
        if self.is_collision(Shape.ROTATE):
            return
        self.delete_shadow()
        self._paint(Cell.EMPTY)
        self.shape = _rotated(self.shape)
        self._paint(Cell.CUR_BLOCK)
        self.make_shadow()

    def move(self, direction: Direction) -> bool:
        """Shift the piece one cell; a blocked downward move locks it in place."""
        if not self.on_board:
            return False
        dy, dx = direction.value
        if self.is_collision(Shape.MOV, dy, dx):
            if direction is Direction.DOWN:
                self.on_board = False
                self._lock()
            return False
        self.delete_shadow()
        self._paint(Cell.EMPTY)
        self.y += dy
        self.x += dx
        # The shadow goes first so the piece is drawn over it.
        self.make_shadow()
        self._paint(Cell.CUR_BLOCK)
        return True

    def hard_drop(self) -> None:
        """Drop the piece straight to its landing row and lock it."""
        if not self.on_board:
            return
        self.on_board = False
        self._paint(Cell.EMPTY)
        self.y = self._landing_row()
        self._lock()

    def delete_shadow(self) -> None:
        """Erase the landing preview of the current piece."""
        self._paint(Cell.EMPTY, self._landing_row())

    def make_shadow(self) -> None:
        """Draw the landing preview without covering the piece itself."""
        for cy, cx in self._cells(self._landing_row()):
            if self.board[cy][cx] != Cell.CUR_BLOCK:
                self.board[cy][cx] = Cell.SHADOW

    # --- lines --------------------------------------------------------

    def record_line(self, y: int, x: int) -> None:
        """Mark cell (y, x) as filled in the row occupancy masks."""
        self._line_bits[y] |= 1 << x

    def clear_lines(self) -> int:
        """Remove full rows and return how many; -1 when the stack reaches the top."""
        height = len(self.board)
        rows = range(height - 2, 0, -1)
        kept: list[tuple[list[int], int]] = []
        cleared: list[tuple[list[int], int]] = []
        for i in rows:
            if i == GAME_OVER_ROW and self._line_bits[i] >= 1:
                return -1
            row = self.board[i]
            if self._line_bits[i] == self._full_mask:
                self._line_bits[i] = 0
                row[1:-1] = [Cell.EMPTY] * (len(row) - 2)
                cleared.append((row, 0))
            else:
                kept.append((row, self._line_bits[i]))
        for i, (row, bits) in zip(rows, kept + cleared):
            self.board[i] = row
            self._line_bits[i] = bits
        return len(cleared)