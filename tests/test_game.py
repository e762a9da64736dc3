import io

import pytest

from consoletris.block import BLOCK_COLORS, Cell, make_board
from consoletris.game import (
    BOARD_HEIGHT,
    BOARD_WIDTH,
    MAP_HEIGHT,
    MAP_WIDTH,
    PLAYER,
    Mode,
    TetrisGame,
    render_border,
    render_cell,
)


class Key(str):
    def __new__(cls, text="", code=None):
        obj = super().__new__(cls, text)
        obj.code = code
        return obj


class FakeTerm:
    KEY_UP = 259
    KEY_DOWN = 258
    KEY_LEFT = 260
    KEY_RIGHT = 261
    KEY_ENTER = 343
    clear = "<clear>"

    def __init__(self, keys=()):
        self.stream = io.StringIO()
        self._keys = list(keys)

    def move_xy(self, x, y):
        return ""

    def color(self, n):
        return ""

    def on_color(self, n):
        return ""

    def inkey(self, timeout=None):
        if self._keys:
            return self._keys.pop(0)
        return Key("")


def test_render_border_shape():
    rows = render_border(BOARD_WIDTH, BOARD_HEIGHT)
    assert len(rows) == BOARD_HEIGHT
    assert all(len(row) == BOARD_WIDTH for row in rows)
    assert rows[0][0] == "┏" and rows[0][-1] == "┓"
    assert rows[-1][0] == "┗" and rows[-1][-1] == "┛"
    assert set(rows[0][1:-1]) == {"━"}
    assert rows[1][0] == "┃" and rows[1][-1] == "┃"


@pytest.mark.parametrize(
    "piece, expected",
    [
        (Cell.EMPTY, (Cell.WHITE, " ")),
        (Cell.SHADOW, (Cell.WHITE, "▨")),
        (Cell.PREV_BLOCK, (Cell.WHITE, "■")),
        (Cell.WALL, (Cell.WHITE, "□")),
        (Cell.RED, (Cell.RED, "■")),
    ],
)
def test_render_cell(piece, expected):
    assert render_cell(piece, None) == expected


def test_render_cell_current_block_uses_piece_color():
    for index, color in enumerate(BLOCK_COLORS):
        assert render_cell(Cell.CUR_BLOCK, index) == (color, "■")


def test_render_cell_unknown_keeps_color():
    assert render_cell(150, None) == (None, "♬")


def test_init_board_creates_walled_boards():
    game = TetrisGame(FakeTerm())
    game.init_board()
    assert len(game.board) == PLAYER
    for board in game.board:
        assert board == make_board(MAP_HEIGHT, MAP_WIDTH)
    game.board[0][2][5] = Cell.RED
    assert game.board[1][2][5] == Cell.EMPTY


def test_draw_border_outputs_corners():
    term = FakeTerm()
    TetrisGame(term).draw_border()
    out = term.stream.getvalue()
    for corner in "┏┓┗┛":
        assert out.count(corner) == 1


@pytest.mark.parametrize(
    "keys, expected",
    [
        ([Key("x"), Key("\n")], Mode.NORMAL),
        ([Key("x"), Key(" ")], Mode.NORMAL),
        ([Key("x"), Key("", FakeTerm.KEY_DOWN), Key("\n")], Mode.PVP_LOCAL),
        ([Key("x"), Key("", FakeTerm.KEY_UP), Key("\r")], Mode.PVP_SERVER),
        (
            [Key("x")] + [Key("", FakeTerm.KEY_DOWN)] * 3 + [Key("", FakeTerm.KEY_ENTER)],
            Mode.NORMAL,
        ),
    ],
)
def test_draw_menu_selection(keys, expected):
    term = FakeTerm(keys)
    assert TetrisGame(term).draw_menu() is expected
    assert "1. SINGLE MODE" in term.stream.getvalue()


def test_draw_board_renders_every_wall():
    term = FakeTerm()
    game = TetrisGame(term)
    game.init_board()
    from consoletris.block import Block

    block = Block(game.board[0], 3)
    game.draw_board(5, 2, 0, block)
    walls = sum(cell == Cell.WALL for row in game.board[0] for cell in row)
    assert term.stream.getvalue().count("□") == walls


def test_single_game_ends_when_spawn_blocked():
    term = FakeTerm()
    game = TetrisGame(term)
    game.init_board()
    game.board[0][2][5] = Cell.WALL
    assert game.single_game() == 0
    assert term.stream.getvalue().endswith("<clear>")


def test_single_game_hard_drops_until_top_out():
    term = FakeTerm([Key(" ")] * 400)
    game = TetrisGame(term)
    game.init_board()
    assert game.single_game() == 0
    assert "<clear>" in term.stream.getvalue()
    stacked = sum(cell < Cell.WALL for row in game.board[0] for cell in row)
    assert stacked > 0


def test_game_loop_runs_menu_then_game():
    term = FakeTerm([Key("x"), Key("\n")] + [Key(" ")] * 400)
    game = TetrisGame(term)
    game.game_loop()
    out = term.stream.getvalue()
    assert "3. SERVER PVP MODE" in out
    assert "<clear>" in out
    assert len(game.board) == PLAYER