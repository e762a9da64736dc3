# consoletris

A falling-block puzzle game that runs in your terminal.

Pieces fall into a well that is 10 columns wide. Steer and rotate them so
that they fill whole rows. A full row is cleared and the rows above it drop
down. A ghost piece shows where the current piece will land. The game ends
when the stack reaches the top of the well, or when a new piece has no room
to appear. The menu then comes back.

## Installing

```
pip install .
```

## Playing

```
consoletris
```

The title screen waits for a key press. Then choose a mode with the up and
down arrow keys and confirm with Enter or Space. The menu lists single,
local versus and server versus modes.

In the game:

| Key         | Action                          |
|-------------|---------------------------------|
| Left/Right  | move the piece sideways         |
| Down        | move the piece down one row     |
| Up          | rotate the piece a quarter turn |
| Space       | drop the piece straight down    |

The piece falls one row every 0.6 seconds. Press Ctrl-C to quit.

The terminal should be at least 100 columns wide and 30 lines high. On
start the game asks the terminal to take that size.

## Using the pieces in code

`consoletris.block` holds the game rules and does no drawing. A board is a
list of rows of `Cell` values; `Block` edits it in place.

```python
import random
from consoletris.block import Block, Direction, make_board

board = make_board(23, 12)
block = Block(board, 3, random.Random(0))
block.spawn()
block.move(Direction.LEFT)
block.rotate()
block.hard_drop()
cleared = block.clear_lines()   # rows cleared, or -1 when the stack has topped out
```

`consoletris.instance.GameInstance` is a small base class that calls
`game_loop` repeatedly between `start` and `stop`. `consoletris.game`
holds the terminal front end, `TetrisGame`, and the `main` function behind
the `consoletris` command.

## What it does not do

- Every menu choice starts the same single-player game; there is no local
  or networked two-player play.
- No score is kept or shown, and there is no preview of the next piece.
- Nothing is saved between runs.

## Running the tests

```
pip install ".[test]"
pytest
```