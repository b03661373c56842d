from pathviz.domain.astar import AStarSearch
from pathviz.domain.dijkstra import DijkstraSearch
from pathviz.domain.grid import Grid
from pathviz.domain.heuristics import manhattan_distance, chebyshev_distance, heuristic_for_mode
from pathviz.domain.path import extract_path, count_turns
from pathviz.domain.types import NeighborMode, NodeState, SearchConfig, SearchStatus

from .helpers import grid_from_rows, run_until_done


def test_heuristics():
    assert manhattan_distance((0, 0), (3, 4)) == 7
    assert chebyshev_distance((0, 0), (3, 4)) == 4
    assert heuristic_for_mode(NeighborMode.FOUR) is manhattan_distance
    assert heuristic_for_mode(NeighborMode.EIGHT) is chebyshev_distance


def test_reset_seeds_start_with_heuristic_f():
    search = AStarSearch()
    search.reset(Grid(5, 5), (0, 0), (3, 4), SearchConfig())
    assert search.snapshot.g_at((0, 0)) == 0
    assert search.snapshot.f_score[0] == 7

    search.reset(Grid(5, 5), (0, 0), (3, 4), SearchConfig(neighbor_mode=NeighborMode.EIGHT))
    assert search.snapshot.f_score[0] == 4


def test_deeper_tie_break_expands_only_the_path_on_open_grid():
    search = AStarSearch()
    search.reset(Grid(5, 5), (0, 0), (4, 4), SearchConfig())
    assert run_until_done(search) == SearchStatus.FOUND
    assert search.expansions == 9
    assert search.snapshot.count(NodeState.PATH) == 9


def test_astar_expands_fewer_cells_than_dijkstra():
    grid = Grid(12, 12)
    astar = AStarSearch()
    dijkstra = DijkstraSearch()
    astar.reset(grid, (0, 0), (11, 11), SearchConfig())
    dijkstra.reset(grid, (0, 0), (11, 11), SearchConfig())
    run_until_done(astar)
    run_until_done(dijkstra)
    assert astar.expansions < dijkstra.expansions
    assert astar.snapshot.g_at((11, 11)) == dijkstra.snapshot.g_at((11, 11)) == 22


def test_turn_penalty_prefers_single_turn_path():
    config = SearchConfig(penalize_turns=True, turn_penalty=5)
    search = AStarSearch()
    search.reset(Grid(4, 4), (0, 0), (3, 3), config)
    assert run_until_done(search) == SearchStatus.FOUND

    path = extract_path(search.snapshot, (0, 0), (3, 3))
    assert len(path) == 7
    assert count_turns(path) == 1
    assert search.snapshot.g_at((3, 3)) == 6 + 5


def test_turn_penalty_picks_straight_corridor_over_zigzag():
    # Side pockets invite detours; each one costs two extra moves and two turns.
    grid = grid_from_rows([
        ".#.#.",
        ".....",
        "#.#.#",
    ])
    config = SearchConfig(penalize_turns=True, turn_penalty=5)
    search = AStarSearch()
    search.reset(grid, (0, 1), (4, 1), config)
    assert run_until_done(search) == SearchStatus.FOUND
    assert extract_path(search.snapshot, (0, 1), (4, 1)) == [(0, 1), (1, 1), (2, 1), (3, 1), (4, 1)]
    assert search.snapshot.g_at((4, 1)) == 4


def test_start_never_pays_turn_penalty():
    config = SearchConfig(penalize_turns=True, turn_penalty=5)
    search = AStarSearch()
    search.reset(Grid(3, 3), (1, 1), (1, 0), config)
    assert run_until_done(search) == SearchStatus.FOUND
    assert search.snapshot.g_at((1, 0)) == 1


def test_zero_turn_penalty_is_ignored():
    base = AStarSearch()
    base.reset(Grid(6, 6), (0, 0), (5, 5), SearchConfig())
    run_until_done(base)

    zero = AStarSearch()
    zero.reset(Grid(6, 6), (0, 0), (5, 5), SearchConfig(penalize_turns=True, turn_penalty=0))
    run_until_done(zero)
    assert zero.snapshot == base.snapshot


def test_turn_penalty_with_weights_and_walls_still_finishes():
    grid = grid_from_rows([
        "..3....",
        ".##.#..",
        "...5#..",
        "#.#....",
        "...#.9.",
    ])
    config = SearchConfig(use_weights=True, penalize_turns=True, turn_penalty=3)
    search = AStarSearch()
    search.reset(grid, (0, 0), (6, 4), config)
    assert run_until_done(search) == SearchStatus.FOUND
    assert search.expansions <= grid.size
    path = extract_path(search.snapshot, (0, 0), (6, 4))
    assert path[0] == (0, 0) and path[-1] == (6, 4)
    assert all(not grid.is_blocked(c) for c in path)


def test_eight_mode_uses_chebyshev_and_diagonals():
    search = AStarSearch()
    search.reset(Grid(6, 4), (0, 0), (5, 3), SearchConfig(neighbor_mode=NeighborMode.EIGHT))
    assert run_until_done(search) == SearchStatus.FOUND
    assert search.snapshot.g_at((5, 3)) == 5
