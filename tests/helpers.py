"""Grid builders and stepping helpers for tests."""

from pathviz.domain.grid import Grid
from pathviz.domain.types import SearchStatus
from pathviz.utils.rng import SeededRNG


def grid_from_rows(rows):
    """
    Build a grid from strings: '#' blocked, digits 1-9 cost, '.' cost 1.
    All rows must have equal length.
    """
    grid = Grid(len(rows[0]), len(rows))
    for y, row in enumerate(rows):
        for x, char in enumerate(row):
            if char == "#":
                grid.set_blocked((x, y), True)
            elif char.isdigit():
                grid.set_cost((x, y), int(char))
    return grid


def run_until_done(search, iterations=1, limit=100_000):
    """Step a reset search until it reaches a terminal status."""
    for _ in range(limit):
        if search.status != SearchStatus.RUNNING:
            break
        search.step(iterations)
    return search.status


def random_grid(seed, width=9, height=7, density=0.25):
    """Seeded grid with costs 1-10 and random walls; the two far corners stay open."""
    rng = SeededRNG(seed)
    grid = Grid(width, height)
    for y in range(height):
        for x in range(width):
            grid.set_cost((x, y), rng.randint(1, 10))
            if rng.random() < density:
                grid.set_blocked((x, y), True)
    grid.set_blocked((0, 0), False)
    grid.set_blocked((width - 1, height - 1), False)
    return grid
