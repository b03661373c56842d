from pathviz.domain.dijkstra import DijkstraSearch
from pathviz.domain.grid import Grid
from pathviz.domain.path import extract_path
from pathviz.domain.types import NeighborMode, NodeState, SearchConfig, SearchStatus

from .helpers import grid_from_rows, run_until_done


def test_first_expansion_opens_orthogonal_neighbors():
    search = DijkstraSearch()
    search.reset(Grid(3, 3), (1, 1), (0, 0), SearchConfig())
    search.step()

    snapshot = search.snapshot
    assert snapshot.get_state((1, 1)) == NodeState.CLOSED
    for coord in [(2, 1), (0, 1), (1, 2), (1, 0)]:
        assert snapshot.get_state(coord) == NodeState.OPEN
        assert snapshot.g_at(coord) == 1
        assert snapshot.parent[snapshot.index_of(coord)] == snapshot.index_of((1, 1))
    assert snapshot.get_state((0, 0)) == NodeState.UNSEEN


def test_f_score_mirrors_g_score():
    search = DijkstraSearch()
    search.reset(Grid(4, 4), (0, 0), (3, 3), SearchConfig())
    run_until_done(search)
    reached = search.snapshot.g_score < 1_000_000_000
    assert (search.snapshot.f_score[reached] == search.snapshot.g_score[reached]).all()


def test_unweighted_ties_follow_enumeration_order():
    grid = grid_from_rows(["191", "111"])
    search = DijkstraSearch()
    search.reset(grid, (0, 0), (2, 0), SearchConfig())
    assert run_until_done(search) == SearchStatus.FOUND
    assert search.snapshot.g_at((2, 0)) == 2
    assert extract_path(search.snapshot, (0, 0), (2, 0)) == [(0, 0), (1, 0), (2, 0)]


def test_weights_route_around_expensive_cells():
    grid = grid_from_rows(["191", "111"])
    search = DijkstraSearch()
    search.reset(grid, (0, 0), (2, 0), SearchConfig(use_weights=True))
    assert run_until_done(search) == SearchStatus.FOUND
    assert search.snapshot.g_at((2, 0)) == 4
    assert extract_path(search.snapshot, (0, 0), (2, 0)) == [(0, 0), (0, 1), (1, 1), (2, 1), (2, 0)]


def test_full_height_wall_gives_no_path():
    grid = grid_from_rows([
        "..#..",
        "..#..",
        "..#..",
        "..#..",
        "..#..",
    ])
    search = DijkstraSearch()
    search.reset(grid, (0, 0), (4, 4), SearchConfig())
    assert run_until_done(search) == SearchStatus.NO_PATH
    assert search.snapshot.count(NodeState.PATH) == 0
    # every reachable cell on the start side got closed
    assert search.snapshot.count(NodeState.CLOSED) == 10


def test_no_path_is_reported_inside_the_step_that_empties_frontier():
    grid = grid_from_rows([".#."])
    search = DijkstraSearch()
    search.reset(grid, (0, 0), (2, 0), SearchConfig())
    assert search.step(100) == SearchStatus.NO_PATH
    assert search.expansions == 1


def test_eight_mode_moves_diagonally():
    search = DijkstraSearch()
    config = SearchConfig(neighbor_mode=NeighborMode.EIGHT)
    search.reset(Grid(3, 3), (0, 0), (2, 2), config)
    assert run_until_done(search) == SearchStatus.FOUND
    assert search.snapshot.g_at((2, 2)) == 2
    assert extract_path(search.snapshot, (0, 0), (2, 2)) == [(0, 0), (1, 1), (2, 2)]


def test_step_returns_found_and_stops_at_goal():
    search = DijkstraSearch()
    search.reset(Grid(2, 1), (0, 0), (1, 0), SearchConfig())
    assert search.step(50) == SearchStatus.FOUND
    assert search.expansions == 2
