import pytest

from wokkibot.minesweeper import (
    DEFAULT_HEIGHT,
    DEFAULT_MINES,
    DEFAULT_WIDTH,
    EMOJI_COVERED,
    EMOJI_CURSOR,
    EMOJI_FLAG,
    EMOJI_MINE,
    Board,
    check_dimensions,
)


def _mine_total(board):
    return sum(cell.is_mine for row in board.cells for cell in row)


def _find(board, predicate):
    for y, row in enumerate(board.cells):
        for x, cell in enumerate(row):
            if predicate(cell):
                return x, y
    raise AssertionError("no matching cell")


def test_defaults_for_non_positive_values():
    board = Board(0, -1, 0, "1")
    assert (board.width, board.height, board.mines) == (
        DEFAULT_WIDTH,
        DEFAULT_HEIGHT,
        DEFAULT_MINES,
    )
    assert _mine_total(board) == DEFAULT_MINES


def test_mines_are_capped():
    board = Board(3, 3, 50, "1")
    assert board.mines == 8
    assert _mine_total(board) == 8


def test_mine_counts_match_neighbours():
    board = Board(6, 5, 7, "1")
    for y in range(board.height):
        for x in range(board.width):
            cell = board.cells[y][x]
            if cell.is_mine:
                continue
            expected = sum(
                board.cells[ny][nx].is_mine
                for ny in range(max(0, y - 1), min(board.height, y + 2))
                for nx in range(max(0, x - 1), min(board.width, x + 2))
            )
            assert cell.mine_count == expected


def test_initial_render_shows_cursor_and_covered_cells():
    board = Board(4, 3, 2, "1")
    rows = str(board).split("\n")
    assert rows[-1] == ""
    assert rows[0] == EMOJI_CURSOR + EMOJI_COVERED * 3
    assert rows[1:3] == [EMOJI_COVERED * 4] * 2
    assert board.render() == str(board)


def test_cursor_moves_are_clamped():
    board = Board(3, 2, 1, "1")
    board.move_up()
    board.move_left()
    assert (board.cursor_x, board.cursor_y) == (0, 0)
    for _ in range(5):
        board.move_right()
        board.move_down()
    assert (board.cursor_x, board.cursor_y) == (2, 1)


def test_toggle_flag_and_render():
    board = Board(3, 3, 1, "1")
    board.toggle_flag()
    assert board.cells[0][0].is_flagged
    board.move_right()
    assert str(board).startswith(EMOJI_FLAG + EMOJI_CURSOR)
    board.move_left()
    board.toggle_flag()
    assert not board.cells[0][0].is_flagged


def test_flagged_cell_cannot_be_revealed():
    board = Board(4, 4, 3, "1")
    board.toggle_flag()
    assert board.reveal() is False
    assert not board.cells[0][0].is_revealed


def test_revealing_a_mine_ends_the_game():
    board = Board(5, 5, 4, "1")
    board.cursor_x, board.cursor_y = _find(board, lambda c: c.is_mine)
    assert board.reveal() is True
    assert board.game_over
    assert all(cell.is_revealed for row in board.cells for cell in row if cell.is_mine)
    position = (board.cursor_x, board.cursor_y)
    board.move_right()
    board.move_down()
    assert (board.cursor_x, board.cursor_y) == position
    board.move_right()
    board.cursor_x, board.cursor_y = _find(board, lambda c: c.is_mine and c is not board.current)
    board.move_up()
    assert EMOJI_MINE in str(board)


def test_revealing_an_empty_cell_floods_the_board():
    board = Board(5, 5, 1, "1")
    board.cursor_x, board.cursor_y = _find(board, lambda c: not c.is_mine and c.mine_count == 0)
    assert board.reveal() is False
    assert not board.game_over
    for row in board.cells:
        for cell in row:
            assert cell.is_revealed != cell.is_mine


def test_check_dimensions():
    check_dimensions(20, 20, 399)
    with pytest.raises(ValueError):
        check_dimensions(21, 5, 3)
    with pytest.raises(ValueError):
        check_dimensions(5, 21, 3)
    with pytest.raises(ValueError):
        check_dimensions(3, 3, 9)