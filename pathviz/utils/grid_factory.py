"""Grid factory for creating empty, demo and random solvable grids."""

from typing import List, Optional, Tuple

from ..domain.dijkstra import DijkstraSearch
from ..domain.grid import Grid
from ..domain.runner import run_to_completion
from ..domain.types import Coord, NeighborMode, SearchConfig, SearchStatus
from .rng import SeededRNG, default_rng

DEMO_WIDTH = 40
DEMO_HEIGHT = 25


def create_empty_grid(width: int, height: int) -> Grid:
    """
    Create a new open grid with unit costs.

    Raises:
        ValueError: If width or height <= 0
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
    return Grid(width, height)


def build_demo_grid() -> Tuple[Grid, Coord, Coord]:
    """
    Build the default 40x25 showcase map: a vertical wall with a gap, a
    horizontal wall with a gap, a block with a single hole and an inner wall
    with a door.

    Returns:
        Tuple of (grid, start_coord, goal_coord)
    """
    grid = create_empty_grid(DEMO_WIDTH, DEMO_HEIGHT)
    start = (2, 2)
    goal = (37, 22)

    for y in range(2, 23):
        if 11 <= y <= 13:
            continue
        grid.set_blocked((10, y), True)

    for x in range(10, 32):
        if 20 <= x <= 22:
            continue
        grid.set_blocked((x, 8), True)

    for y in range(14, 19):
        for x in range(24, 31):
            if (x, y) == (27, 16):
                continue
            grid.set_blocked((x, y), True)

    for y in range(3, 12):
        if y == 6:
            continue
        grid.set_blocked((20, y), True)

    return grid, start, goal


def _open_cells(grid: Grid) -> List[Coord]:
    return [(x, y) for y in range(grid.height) for x in range(grid.width)
            if not grid.is_blocked((x, y))]


def add_random_walls(grid: Grid, density: float, rng: Optional[SeededRNG] = None,
                     keep: Tuple[Coord, ...] = ()) -> int:
    """
    Block a random share of the currently open cells.

    Args:
        grid: Grid to modify
        density: Wall density (0.0 to 1.0) relative to the whole grid
        rng: Random number generator to use (uses default if None)
        keep: Cells that must stay open

    Returns:
        Number of walls placed
    """
    if not (0.0 <= density <= 1.0):
        raise ValueError(f"Density must be between 0.0 and 1.0, got {density}")
    if rng is None:
        rng = default_rng

    candidates = [c for c in _open_cells(grid) if c not in keep]
    num_walls = min(int(grid.size * density), len(candidates))
    for coord in rng.sample(candidates, num_walls):
        grid.set_blocked(coord, True)
    return num_walls


def add_random_costs(grid: Grid, max_cost: int = 10, rng: Optional[SeededRNG] = None) -> None:
    """Give every cell a random cost in [1, max_cost]."""
    if max_cost < 1:
        raise ValueError(f"max_cost must be >= 1, got {max_cost}")
    if rng is None:
        rng = default_rng

    for y in range(grid.height):
        for x in range(grid.width):
            grid.set_cost((x, y), rng.randint(1, max_cost))


def place_start_and_goal(grid: Grid, rng: Optional[SeededRNG] = None) -> Tuple[Coord, Coord]:
    """
    Pick distinct open start and goal cells, preferring opposite corners.

    Raises:
        ValueError: If fewer than two open cells exist
    """
    if rng is None:
        rng = default_rng

    open_cells = _open_cells(grid)
    if len(open_cells) < 2:
        raise ValueError("Not enough open cells for start and goal")

    corner = [c for c in open_cells if c[0] < grid.width // 3 and c[1] < grid.height // 3]
    start = rng.choice(corner) if corner else rng.choice(open_cells)

    threshold = min(grid.width, grid.height) // 2
    far = [c for c in open_cells
           if abs(c[0] - start[0]) + abs(c[1] - start[1]) > threshold]
    if far:
        goal = rng.choice(far)
    else:
        others = [c for c in open_cells if c != start]
        goal = max(others, key=lambda c: abs(c[0] - start[0]) + abs(c[1] - start[1]))

    return start, goal


def path_exists(grid: Grid, start: Coord, goal: Coord,
                neighbor_mode: NeighborMode = NeighborMode.FOUR) -> bool:
    """Check reachability by running a uniform-cost search to completion."""
    search = DijkstraSearch()
    if not search.reset(grid, start, goal, SearchConfig(neighbor_mode=neighbor_mode)):
        return False
    return run_to_completion(search, iterations_per_step=grid.size).status == SearchStatus.FOUND


def generate_solvable_grid(width: int, height: int, wall_density: float,
                           seed: Optional[int] = None, weighted: bool = False,
                           max_attempts: int = 10) -> Tuple[Grid, Coord, Coord]:
    """
    Generate a random grid that has a 4-connected path from start to goal.

    Args:
        width: Grid width
        height: Grid height
        wall_density: Desired wall density (0.0 to 1.0)
        seed: Random seed for reproducibility
        weighted: Also randomize cell costs in [1, 10]
        max_attempts: Attempts before falling back to a lighter wall density

    Returns:
        Tuple of (grid, start_coord, goal_coord)
    """
    rng = SeededRNG(seed)
    density = wall_density

    for attempt in range(max_attempts):
        grid = create_empty_grid(width, height)
        if weighted:
            add_random_costs(grid, rng=rng)
        start, goal = place_start_and_goal(grid, rng)
        add_random_walls(grid, density, rng, keep=(start, goal))
        if path_exists(grid, start, goal):
            return grid, start, goal
        # Thin the walls out a little each time
        density *= 0.8

    grid = create_empty_grid(width, height)
    if weighted:
        add_random_costs(grid, rng=rng)
    start, goal = place_start_and_goal(grid, rng)
    return grid, start, goal
