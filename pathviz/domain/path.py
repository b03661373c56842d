"""Path reconstruction over the snapshot's parent pointers."""

from typing import List

from .grid import Grid
from .snapshot import SearchSnapshot
from .types import Coord, NodeState, NO_PARENT, from_index, to_index


def rebuild_path(snapshot: SearchSnapshot, start_index: int, goal_index: int) -> None:
    """
    Mark the goal-to-start parent chain as PATH.

    The walk is bounded by the cell count so a corrupted or cyclic parent
    chain cannot loop forever. The goal is always marked; the start is marked
    only when the walk actually reaches it.
    """
    current = goal_index
    steps = 0
    limit = snapshot.size

    while current != NO_PARENT and current != start_index and steps < limit:
        snapshot.state[current] = NodeState.PATH
        current = int(snapshot.parent[current])
        steps += 1

    if current == start_index:
        snapshot.state[start_index] = NodeState.PATH

    if 0 <= goal_index < snapshot.size:
        snapshot.state[goal_index] = NodeState.PATH


def extract_path(snapshot: SearchSnapshot, start: Coord, goal: Coord) -> List[Coord]:
    """
    Return the start-to-goal coordinate list by following parent pointers.
    Returns an empty list if the chain from goal does not reach start.
    """
    if not snapshot.valid() or not snapshot.in_bounds(start) or not snapshot.in_bounds(goal):
        return []

    start_index = to_index(snapshot.width, start)
    current = to_index(snapshot.width, goal)
    chain = [current]
    while current != start_index and len(chain) <= snapshot.size:
        current = int(snapshot.parent[current])
        if current == NO_PARENT:
            return []
        chain.append(current)

    if current != start_index:
        return []

    return [from_index(snapshot.width, index) for index in reversed(chain)]


def calculate_path_cost(path: List[Coord], grid: Grid, use_weights: bool = True) -> int:
    """Sum of entry costs along a path, the start cell excluded."""
    if len(path) < 2:
        return 0
    if not use_weights:
        return len(path) - 1
    return sum(grid.cost(coord) for coord in path[1:])


def count_turns(path: List[Coord]) -> int:
    """Number of direction changes along a path."""
    turns = 0
    for i in range(2, len(path)):
        before = (path[i - 1][0] - path[i - 2][0], path[i - 1][1] - path[i - 2][1])
        after = (path[i][0] - path[i - 1][0], path[i][1] - path[i - 1][1])
        if before != after:
            turns += 1
    return turns
