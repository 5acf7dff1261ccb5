"""A single-player minesweeper board driven by cursor moves."""

from __future__ import annotations

import random
from dataclasses import dataclass

EMOJI_MINE = "💣"
EMOJI_FLAG = "🚩"
EMOJI_COVERED = "⬜"
EMOJI_EMPTY = "⬛"
EMOJI_NUMBERS = {
    1: "1️⃣",
    2: "2️⃣",
    3: "3️⃣",
    4: "4️⃣",
    5: "5️⃣",
    6: "6️⃣",
    7: "7️⃣",
    8: "8️⃣",
}
EMOJI_UP = "⬆️"
EMOJI_DOWN = "⬇️"
EMOJI_LEFT = "⬅️"
EMOJI_RIGHT = "➡️"
EMOJI_CURSOR = "🧑"

DEFAULT_WIDTH = 8
DEFAULT_HEIGHT = 8
DEFAULT_MINES = 10
MAX_SIDE = 20


@dataclass
class Cell:
    """One square of the board."""

    is_mine: bool = False
    is_revealed: bool = False
    is_flagged: bool = False
    mine_count: int = 0


def check_dimensions(width: int, height: int, mines: int) -> None:
    """Reject board sizes a game may not be started with."""
    if width > MAX_SIDE or height > MAX_SIDE or mines > width * height - 1:
        raise ValueError(
            "Width and height must be less than 20 and mines must be less than (width*height)-1"
        )


class Board:
    """A minesweeper game with a cursor, owned by one user."""

    def __init__(self, width: int, height: int, mines: int, author_id: str) -> None:
        if width <= 0:
            width = DEFAULT_WIDTH
        if height <= 0:
            height = DEFAULT_HEIGHT
        if mines <= 0:
            mines = DEFAULT_MINES
        mines = min(mines, width * height - 1)

        self.width = width
        self.height = height
        self.mines = mines
        self.author_id = author_id
        self.cursor_x = 0
        self.cursor_y = 0
        self.game_over = False
        self.cells = [[Cell() for _ in range(width)] for _ in range(height)]

        placed = 0
        while placed < mines:
            x = random.randrange(width)
            y = random.randrange(height)
            if not self.cells[y][x].is_mine:
                self.cells[y][x].is_mine = True
                placed += 1

        for y, row in enumerate(self.cells):
            for x, cell in enumerate(row):
                if not cell.is_mine:
                    cell.mine_count = sum(
                        self.cells[ny][nx].is_mine for nx, ny in self._area(x, y)
                    )

    def _area(self, x: int, y: int):
        """Coordinates of the 3x3 block around (x, y) that lie on the board."""
        for dy in (-1, 0, 1):
            for dx in (-1, 0, 1):
                nx, ny = x + dx, y + dy
                if 0 <= nx < self.width and 0 <= ny < self.height:
                    yield nx, ny

    @property
    def current(self) -> Cell:
        return self.cells[self.cursor_y][self.cursor_x]

    def _cell_emoji(self, x: int, y: int, cell: Cell) -> str:
        if x == self.cursor_x and y == self.cursor_y:
            return EMOJI_CURSOR
        if cell.is_flagged:
            return EMOJI_FLAG
        if not cell.is_revealed:
            return EMOJI_COVERED
        if cell.is_mine:
            return EMOJI_MINE
        if cell.mine_count == 0:
            return EMOJI_EMPTY
        return EMOJI_NUMBERS.get(cell.mine_count, "")

    def render(self) -> str:
        """The board as rows of emoji, each row ending in a newline."""
        return "".join(
            "".join(self._cell_emoji(x, y, cell) for x, cell in enumerate(row)) + "\n"
            for y, row in enumerate(self.cells)
        )

    def __str__(self) -> str:
        return self.render()

    def move_up(self) -> None:
        if not self.game_over and self.cursor_y > 0:
            self.cursor_y -= 1

    def move_down(self) -> None:
        if not self.game_over and self.cursor_y < self.height - 1:
            self.cursor_y += 1

    def move_left(self) -> None:
        if not self.game_over and self.cursor_x > 0:
            self.cursor_x -= 1

    def move_right(self) -> None:
        if not self.game_over and self.cursor_x < self.width - 1:
            self.cursor_x += 1

    def toggle_flag(self) -> None:
        """Flag or unflag the covered cell under the cursor."""
        if self.game_over:
            return
        cell = self.current
        if not cell.is_revealed:
            cell.is_flagged = not cell.is_flagged

    def reveal(self) -> bool:
        """Uncover the cell under the cursor; return True if it was a mine."""
        if self.game_over:
            return False
        cell = self.current
        if cell.is_flagged or cell.is_revealed:
            return False
        cell.is_revealed = True
        if cell.is_mine:
            self.game_over = True
            for row in self.cells:
                for other in row:
                    if other.is_mine:
                        other.is_revealed = True
            return True
        if cell.mine_count == 0:
            self._reveal_empty_adjacent(self.cursor_x, self.cursor_y)
        return False

    def _reveal_empty_adjacent(self, x: int, y: int) -> None:
        pending = [(x, y)]
        while pending:
            cx, cy = pending.pop()
            for nx, ny in self._area(cx, cy):
                neighbour = self.cells[ny][nx]
                if not neighbour.is_revealed and not neighbour.is_flagged:
                    neighbour.is_revealed = True
                    if neighbour.mine_count == 0:
                        pending.append((nx, ny))