# blockfall

A small falling-block puzzle game built with pygame. Pieces drop onto a
board of 20 rows by 10 columns by default. Fill a row to clear it. The
next piece is shown in a small preview beside the board.

## Installing

```
pip install .
```

## Playing

```
blockfall
```

Keys:

- **Left / Right arrows**: move the piece sideways
- **Down arrow** (hold): drop faster
- **R**: rotate the piece
- **N**: start again after the game is over
- **Escape** or closing the window: quit

Every piece that lands scores 2 points. Every full row that is cleared
scores 100. Clearing a row pauses the game for 0.75 seconds.

### Options

| Option | Default | Meaning |
| --- | --- | --- |
| `--width` | 450 | window width in pixels |
| `--height` | 620 | window height in pixels |
| `--fps` | 60 | frames per second |
| `--rows` | 20 | grid rows |
| `--cols` | 10 | grid columns |
| `--cell-size` | 30 | cell size in pixels |
| `--interval` | 0.25 | seconds between drops |
| `--assets` | `assets` | assets directory |
| `--seed` | none | random seed for the piece sequence |

### Sounds and font

The game looks for these files under the assets directory:

- `sounds/music.ogg`: background music, looped; it stops when the game is over
- `sounds/rotate.wav`, `sounds/line.wav`, `sounds/game_over.wav`: sound effects
- `fonts/main.otf`: the font for the score and help text

The package does not ship any of these files. A file that is missing is
reported on standard error and the game runs without it; without the font
file, pygame's default font is used.

## Using the game logic directly

The rules run without a window. Pass `0` as the line-clear delay to skip
the pause:

```python
import random
from blockfall.game import Key, Tetris

game = Tetris(20, 10, 30, random.Random(1), None, 0)
game.input(Key.LEFT, False)
game.update()
print(game.score, game.game_over)
print(game.grid.format())
```

The main parts are:

- `blockfall.position.Position`: a column/row pair, with `moved(step)`
- `blockfall.pieces.Piece` and its shapes `LPiece`, `IPiece`, `ZPiece`,
  `SPiece`, `OPiece`, `TPiece`; `random_piece(rng)` picks one at random
- `blockfall.grid.Grid`: the board, with `add_piece`, `erase_piece`,
  `format` and `draw`
- `blockfall.game.Tetris`: the game rules; `blockfall.game.Key` lists the
  key commands
- `blockfall.app.main`: the window and main loop behind the `blockfall`
  command

## Running the tests

```
pip install .[test]
pytest
```