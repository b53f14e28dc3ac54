from weiqi.core import (
    KOMI,
    Captures,
    Point,
    Stone,
    Winner,
    board_from_rows,
    calculate_final_score,
    initialize_board,
    point_key,
    resignation_score,
    score_regions,
    toggle_dead_group,
)


def walled_board(black_col: int = 2, white_col: int = 6):
    board = initialize_board(9)
    board[:, black_col] = Stone.BLACK
    if white_col is not None:
        board[:, white_col] = Stone.WHITE
    return board


def test_empty_board_is_neutral() -> None:
    board = initialize_board(9)

    result = calculate_final_score(board, frozenset(), Captures(), KOMI)

    assert result.black.territory == 0
    assert result.white.territory == 0
    assert result.black.total == 0
    assert result.white.total == KOMI
    assert result.winner == Winner.WHITE


def test_all_stones_dead_leaves_neutral_board_and_credits_captures() -> None:
    board = initialize_board(9)
    board[0, 0] = Stone.BLACK
    board[8, 8] = Stone.WHITE
    dead = {point_key(0, 0, 9), point_key(8, 8, 9)}

    result = calculate_final_score(board, dead, Captures(), 6.5)

    assert result.black.territory == 0
    assert result.white.territory == 0
    assert result.black.captures == 1
    assert result.white.captures == 1
    assert result.white.total == 7.5
    assert board[0, 0] == Stone.BLACK


def test_region_enclosed_by_one_colour_is_territory() -> None:
    board = walled_board(black_col=2, white_col=None)

    result = calculate_final_score(board, frozenset(), Captures(), KOMI)

    assert result.black.territory == 72
    assert result.black.total == 72
    assert result.winner == Winner.BLACK


def test_territory_partition_covers_each_empty_point_once() -> None:
    board = walled_board()

    regions = score_regions(board)

    assert len(regions.black) == 18
    assert len(regions.white) == 18
    assert len(regions.neutral) == 27
    assert not (regions.black & regions.white)
    assert not (regions.black & regions.neutral)
    assert not (regions.white & regions.neutral)
    empty = {Point(x, y) for y in range(9) for x in range(9) if board[y, x] == Stone.EMPTY}
    assert regions.black | regions.white | regions.neutral == empty


def test_scores_include_captures_and_komi() -> None:
    board = walled_board()

    result = calculate_final_score(board, frozenset(), Captures(black=5, white=2), 6.5)

    assert result.black.total == 18 + 5
    assert result.white.total == 18 + 2 + 6.5
    assert result.white.komi == 6.5
    assert result.black.komi == 0.0
    assert result.winner == Winner.WHITE


def test_exact_tie_is_a_draw() -> None:
    board = walled_board()

    result = calculate_final_score(board, frozenset(), Captures(), 0.0)

    assert result.black.total == result.white.total
    assert result.winner == Winner.DRAW


def test_scoring_is_pure() -> None:
    board = walled_board()
    dead = frozenset({point_key(2, 0, 9)})

    first = calculate_final_score(board, dead, Captures(1, 1), KOMI)
    second = calculate_final_score(board, dead, Captures(1, 1), KOMI)

    assert first == second
    assert board[0, 2] == Stone.BLACK


def test_dead_stone_inside_territory_is_removed_for_scoring() -> None:
    board = walled_board()
    board[0, 0] = Stone.WHITE

    alive = calculate_final_score(board, frozenset(), Captures(), KOMI)
    dead = calculate_final_score(board, {point_key(0, 0, 9)}, Captures(), KOMI)

    assert alive.black.territory == 0
    assert dead.black.territory == 18
    assert dead.black.captures == 1
    assert dead.white.captures == 0


def test_dead_key_on_empty_point_is_ignored() -> None:
    board = walled_board()

    result = calculate_final_score(board, {point_key(0, 0, 9)}, Captures(), KOMI)

    assert result.black.captures == 0
    assert result.black.territory == 18


def test_toggle_dead_group_marks_and_revives_whole_group() -> None:
    board = board_from_rows(
        [
            "X X . . . . . . .",
            ". . . . . . . . .",
            ". . . . . . . . .",
            ". . . . . . . . .",
            ". . . . . . . . .",
            ". . . . . . . . .",
            ". . . . . . . . .",
            ". . . . . . . O .",
            ". . . . . . . . .",
        ]
    )

    marked = toggle_dead_group(board, frozenset(), 1, 0)
    assert marked == {point_key(0, 0, 9), point_key(1, 0, 9)}

    both = toggle_dead_group(board, marked, 7, 7)
    assert point_key(7, 7, 9) in both

    revived = toggle_dead_group(board, both, 0, 0)
    assert revived == {point_key(7, 7, 9)}

    assert toggle_dead_group(board, revived, 4, 4) == revived


def test_resignation_uses_fixed_totals() -> None:
    result = resignation_score(Stone.BLACK, Captures(black=3, white=4), KOMI)

    assert result.winner == Winner.WHITE
    assert result.white.total == 100
    assert result.black.total == 0
    assert result.black.captures == 3
    assert result.white.komi == KOMI
    assert result.black.territory == result.white.territory == 0
