import pytest

from menukit.grid import GridCursor

LAYOUTS = [(4, 10), (4, 8), (3, 1), (1, 5), (5, 3), (2, 7)]


def test_rows_of_empty_grid_is_one():
    assert GridCursor(columns=4, size=0).rows() == 1


@pytest.mark.parametrize("columns,size", LAYOUTS)
def test_rows_cover_all_values(columns, size):
    rows = GridCursor(columns=columns, size=size).rows()
    assert rows * columns >= size
    assert (rows - 1) * columns < size


def test_zero_columns_acts_as_one_column():
    cursor = GridCursor(columns=0, size=6)
    assert cursor.rows() == 6
    cursor.move_next()
    assert (cursor.col, cursor.row) == (0, 1)


@pytest.mark.parametrize("columns,size", LAYOUTS)
def test_move_next_visits_every_value_in_order(columns, size):
    cursor = GridCursor(columns=columns, size=size)
    seen = []
    for _ in range(size):
        cursor.move_next()
        seen.append(cursor.index())
    assert seen == list(range(1, size)) + [0]


@pytest.mark.parametrize("columns,size", LAYOUTS)
def test_move_previous_visits_every_value_backwards(columns, size):
    cursor = GridCursor(columns=columns, size=size)
    seen = []
    for _ in range(size):
        cursor.move_previous()
        seen.append(cursor.index())
    assert seen == list(range(size - 1, -1, -1))


@pytest.mark.parametrize("columns,size", LAYOUTS)
def test_move_previous_undoes_move_next(columns, size):
    cursor = GridCursor(columns=columns, size=size)
    for _ in range(size):
        before = cursor.index()
        cursor.move_next()
        after = cursor.index()
        cursor.move_previous()
        assert cursor.index() == before
        cursor.move_next()
        assert cursor.index() == after


def test_reset_returns_to_origin():
    cursor = GridCursor(columns=4, size=10, col=2, row=1)
    cursor.reset()
    assert (cursor.col, cursor.row, cursor.index()) == (0, 0, 0)


def test_single_column_down_matches_next():
    down = GridCursor(columns=1, size=5)
    nxt = GridCursor(columns=1, size=5)
    for _ in range(7):
        down.move_down()
        nxt.move_next()
        assert down.index() == nxt.index()


def test_move_down_wraps_when_column_missing_in_last_row():
    cursor = GridCursor(columns=4, size=10, col=3, row=1)
    cursor.move_down()
    assert (cursor.col, cursor.row) == (3, 0)


def test_move_up_from_top_skips_short_last_row():
    cursor = GridCursor(columns=4, size=10, col=3, row=0)
    cursor.move_up()
    assert cursor.col == 3
    assert cursor.row == cursor.rows() - 2
    assert cursor.index() < cursor.size


def test_move_up_from_top_goes_to_last_row():
    cursor = GridCursor(columns=4, size=10, col=0, row=0)
    cursor.move_up()
    assert cursor.row == cursor.rows() - 1


def test_move_up_then_down_returns():
    cursor = GridCursor(columns=4, size=10, col=1, row=1)
    cursor.move_up()
    cursor.move_down()
    assert (cursor.col, cursor.row) == (1, 1)


def test_move_left_wraps_to_last_column():
    cursor = GridCursor(columns=4, size=10, col=0, row=1)
    cursor.move_left()
    assert cursor.col == cursor.columns - 1
    assert cursor.row == 1


def test_move_left_stays_on_last_value_in_first_column():
    cursor = GridCursor(columns=4, size=9, col=0, row=2)
    assert cursor.index() == cursor.size - 1
    cursor.move_left()
    assert (cursor.col, cursor.row) == (0, 2)


def test_move_right_wraps_at_last_value():
    cursor = GridCursor(columns=4, size=10, col=1, row=2)
    assert cursor.index() == cursor.size - 1
    cursor.move_right()
    assert (cursor.col, cursor.row) == (0, 2)


def test_move_right_wraps_at_last_column():
    cursor = GridCursor(columns=4, size=10, col=3, row=0)
    cursor.move_right()
    assert (cursor.col, cursor.row) == (0, 0)


def test_move_left_undoes_move_right_inside_row():
    cursor = GridCursor(columns=4, size=10, col=1, row=0)
    cursor.move_right()
    assert cursor.col == 2
    cursor.move_left()
    assert cursor.col == 1