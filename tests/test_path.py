from pathviz.domain.grid import Grid
from pathviz.domain.path import rebuild_path, extract_path, calculate_path_cost, count_turns
from pathviz.domain.snapshot import SearchSnapshot
from pathviz.domain.types import NodeState, NO_PARENT


def _chain_snapshot():
    # 3x1 row: 0 <- 1 <- 2
    snapshot = SearchSnapshot(3, 1)
    snapshot.parent[0] = NO_PARENT
    snapshot.parent[1] = 0
    snapshot.parent[2] = 1
    return snapshot


def test_rebuild_marks_whole_chain():
    snapshot = _chain_snapshot()
    rebuild_path(snapshot, 0, 2)
    assert snapshot.count(NodeState.PATH) == 3


def test_rebuild_with_broken_chain_marks_goal_only_part():
    snapshot = _chain_snapshot()
    snapshot.parent[1] = NO_PARENT
    rebuild_path(snapshot, 0, 2)
    assert snapshot.get_state((2, 0)) == NodeState.PATH
    assert snapshot.get_state((1, 0)) == NodeState.PATH
    assert snapshot.get_state((0, 0)) == NodeState.UNSEEN


def test_rebuild_terminates_on_cycle():
    snapshot = SearchSnapshot(3, 1)
    snapshot.parent[1] = 2
    snapshot.parent[2] = 1
    rebuild_path(snapshot, 0, 2)
    assert snapshot.get_state((0, 0)) == NodeState.UNSEEN
    assert snapshot.get_state((2, 0)) == NodeState.PATH


def test_rebuild_start_equals_goal():
    snapshot = SearchSnapshot(2, 2)
    rebuild_path(snapshot, 3, 3)
    assert snapshot.count(NodeState.PATH) == 1


def test_extract_path_orders_start_to_goal():
    snapshot = _chain_snapshot()
    assert extract_path(snapshot, (0, 0), (2, 0)) == [(0, 0), (1, 0), (2, 0)]


def test_extract_path_empty_when_chain_broken_or_cyclic():
    snapshot = _chain_snapshot()
    snapshot.parent[1] = NO_PARENT
    assert extract_path(snapshot, (0, 0), (2, 0)) == []

    cyclic = SearchSnapshot(3, 1)
    cyclic.parent[1] = 2
    cyclic.parent[2] = 1
    assert extract_path(cyclic, (0, 0), (2, 0)) == []


def test_path_cost_and_turns():
    grid = Grid(3, 3)
    grid.set_cost((1, 0), 4)
    path = [(0, 0), (1, 0), (2, 0), (2, 1)]
    assert calculate_path_cost(path, grid) == 4 + 1 + 1
    assert calculate_path_cost(path, grid, use_weights=False) == 3
    assert calculate_path_cost([(0, 0)], grid) == 0
    assert count_turns(path) == 1
    assert count_turns([(0, 0), (1, 0), (1, 1), (2, 1), (2, 2)]) == 3
