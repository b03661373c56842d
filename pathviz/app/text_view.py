"""Plain-text rendering of a grid overlaid with search state."""

from typing import List

from ..domain.grid import Grid
from ..domain.snapshot import SearchSnapshot
from ..domain.types import Coord, NodeState

STATE_GLYPHS = {
    NodeState.OPEN: "o",
    NodeState.CLOSED: ".",
    NodeState.PATH: "*",
}


def render_lines(grid: Grid, snapshot: SearchSnapshot, start: Coord, goal: Coord) -> List[str]:
    """
    One string per grid row. Walls are '#', endpoints 'S' and 'G', search
    state 'o' (open), '.' (closed) or '*' (path). Unseen cells show their
    cost, with 10 printed as '0'.
    """
    has_state = snapshot.valid() and snapshot.width == grid.width and snapshot.height == grid.height
    states = snapshot.state_grid() if has_state else None

    lines = []
    for y in range(grid.height):
        row = []
        for x in range(grid.width):
            coord = (x, y)
            if coord == start:
                row.append("S")
            elif coord == goal:
                row.append("G")
            elif grid.is_blocked(coord):
                row.append("#")
            else:
                state = NodeState(int(states[y, x])) if states is not None else NodeState.UNSEEN
                row.append(STATE_GLYPHS.get(state, str(grid.cost(coord) % 10)))
        lines.append("".join(row))
    return lines


def render(grid: Grid, snapshot: SearchSnapshot, start: Coord, goal: Coord) -> str:
    return "\n".join(render_lines(grid, snapshot, start, goal))
