"""
Map serialization for the PATHVIZ 1 text format.

    PATHVIZ 1
    <width> <height>
    <startX> <startY>
    <goalX> <goalY>
    <height rows of <width> space-separated tokens: "#" or a cost 1-10>

Saves are atomic: the map is written to a temporary file next to the target
and moved into place, so a failed save never leaves a truncated map behind.
"""

import logging
import os
import re
import tempfile
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple

from ..domain.grid import Grid
from ..domain.types import Coord, in_bounds

logger = logging.getLogger(__name__)

MAGIC = "PATHVIZ"
VERSION = 1
MAP_SUFFIX = ".pvz"
MIN_COST = 1
MAX_COST = 10

# int() alone also accepts "1_0" and non-ASCII digits
INT_TOKEN = re.compile(r"[+-]?[0-9]+")


class MapFormatError(Exception):
    """Raised when map text does not follow the PATHVIZ 1 format."""


@dataclass
class MapData:
    """A loaded map: grid plus endpoints."""
    grid: Grid
    start: Coord
    goal: Coord


@dataclass
class MapIOResult:
    """Outcome of a save or load; message is human-readable on failure."""
    success: bool
    message: str = ""
    data: Optional[MapData] = None

    def __bool__(self) -> bool:
        return self.success


def clamp_cost(value: int) -> int:
    """Clamp a cost into the storable [1, 10] range."""
    return max(MIN_COST, min(MAX_COST, value))


def validate_endpoints(grid: Grid, start: Coord, goal: Coord) -> Optional[str]:
    """Return the reason a grid/endpoint combination cannot be saved, or None."""
    if grid.width <= 0 or grid.height <= 0:
        return "Grid has invalid dimensions."
    if not grid.in_bounds(start) or not grid.in_bounds(goal):
        return "Start or goal is out of bounds."
    if start == goal:
        return "Start and goal must be different."
    if grid.is_blocked(start) or grid.is_blocked(goal):
        return "Start or goal is blocked."
    return None


def format_map(grid: Grid, start: Coord, goal: Coord) -> str:
    """Serialize a grid and its endpoints to PATHVIZ 1 text."""
    lines = [
        f"{MAGIC} {VERSION}",
        f"{grid.width} {grid.height}",
        f"{start[0]} {start[1]}",
        f"{goal[0]} {goal[1]}",
    ]
    for y in range(grid.height):
        tokens = []
        for x in range(grid.width):
            if grid.is_blocked((x, y)):
                tokens.append("#")
            else:
                tokens.append(str(clamp_cost(grid.cost((x, y)))))
        lines.append(" ".join(tokens))
    return "\n".join(lines) + "\n"


def _parse_int(token: str) -> Optional[int]:
    if not INT_TOKEN.fullmatch(token):
        return None
    return int(token)


def _parse_int_pair(line: str) -> Optional[Tuple[int, int]]:
    tokens = line.split()
    if len(tokens) != 2:
        return None
    a, b = _parse_int(tokens[0]), _parse_int(tokens[1])
    if a is None or b is None:
        return None
    return a, b


def parse_map(text: str) -> MapData:
    """
    Parse PATHVIZ 1 text.

    Raises:
        MapFormatError: With a distinct message for each validation failure
    """
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    cursor = iter(lines)

    def next_line(missing_message: str) -> str:
        line = next(cursor, None)
        if line is None:
            raise MapFormatError(missing_message)
        return line

    header = next_line("Missing header line.").split()
    if len(header) < 2 or header[0] != MAGIC or _parse_int(header[1]) != VERSION:
        raise MapFormatError(f"Invalid header (expected '{MAGIC} {VERSION}').")
    if len(header) > 2:
        raise MapFormatError("Unexpected data after header.")

    size = _parse_int_pair(next_line("Missing grid size line."))
    if size is None:
        raise MapFormatError("Invalid grid size line.")
    width, height = size
    if width <= 0 or height <= 0:
        raise MapFormatError("Grid dimensions must be positive.")

    start = _parse_int_pair(next_line("Missing start position line."))
    if start is None:
        raise MapFormatError("Invalid start position line.")

    goal = _parse_int_pair(next_line("Missing goal position line."))
    if goal is None:
        raise MapFormatError("Invalid goal position line.")

    if not in_bounds(width, height, start) or not in_bounds(width, height, goal):
        raise MapFormatError("Start or goal is out of bounds.")
    if start == goal:
        raise MapFormatError("Start and goal must be different.")

    grid = Grid(width, height)
    for y in range(height):
        tokens = next_line("Unexpected end of file while reading grid data.").split()
        for x in range(width):
            if x >= len(tokens):
                raise MapFormatError(f"Not enough cells in row {y}.")
            token = tokens[x]
            if token == "#":
                grid.set_blocked((x, y), True)
                grid.set_cost((x, y), 1)
                continue
            value = _parse_int(token)
            if value is None:
                raise MapFormatError(f"Invalid cell token at ({x}, {y}).")
            grid.set_blocked((x, y), False)
            grid.set_cost((x, y), clamp_cost(value))
        if len(tokens) > width:
            raise MapFormatError(f"Too many cells in row {y}.")

    for line in cursor:
        if line.strip():
            raise MapFormatError("Unexpected extra data after grid.")

    return MapData(grid=grid, start=start, goal=goal)


def save_map(grid: Grid, start: Coord, goal: Coord, filepath: str) -> MapIOResult:
    """Save a map to filepath atomically."""
    if not filepath:
        return MapIOResult(False, "Missing file path.")

    reason = validate_endpoints(grid, start, goal)
    if reason is not None:
        return MapIOResult(False, reason)

    text = format_map(grid, start, goal)
    directory = os.path.dirname(os.path.abspath(filepath))
    try:
        os.makedirs(directory, exist_ok=True)
        fd, temp_path = tempfile.mkstemp(dir=directory, prefix=".pathviz-", suffix=".tmp")
    except OSError as e:
        logger.warning("Cannot open %s for writing: %s", filepath, e)
        return MapIOResult(False, "Failed to open file for writing.")

    try:
        with os.fdopen(fd, "w", encoding="ascii", newline="\n") as f:
            f.write(text)
        os.chmod(temp_path, 0o644)
        os.replace(temp_path, filepath)
    except OSError as e:
        logger.warning("Failed writing map to %s: %s", filepath, e)
        try:
            os.remove(temp_path)
        except OSError:
            logger.debug("Temporary file %s already gone", temp_path)
        return MapIOResult(False, "Failed while writing map data.")

    logger.info("Saved %dx%d map to %s", grid.width, grid.height, filepath)
    return MapIOResult(True, data=MapData(grid=grid, start=start, goal=goal))


def load_map(filepath: str) -> MapIOResult:
    """Load a map from filepath."""
    if not filepath:
        return MapIOResult(False, "Missing file path.")

    try:
        with open(filepath, "r", encoding="ascii", newline="") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Cannot read map %s: %s", filepath, e)
        return MapIOResult(False, "Failed to open file for reading.")

    try:
        data = parse_map(text)
    except MapFormatError as e:
        logger.info("Rejected map %s: %s", filepath, e)
        return MapIOResult(False, str(e))

    return MapIOResult(True, data=data)


def ensure_map_suffix(filepath: str) -> str:
    """Append the .pvz suffix when the path has none."""
    path = Path(filepath)
    if path.suffix:
        return filepath
    return str(path.with_suffix(MAP_SUFFIX))


def get_maps_directory(base: Optional[str] = None) -> str:
    """Get the directory for saved maps, creating it if needed."""
    maps_dir = Path(base) if base else Path.cwd() / "saved_maps"
    maps_dir.mkdir(parents=True, exist_ok=True)
    return str(maps_dir)


def list_saved_maps(directory: Optional[str] = None) -> List[Tuple[str, MapData]]:
    """List every loadable map in the directory, newest first."""
    maps_dir = Path(get_maps_directory(directory))
    maps = []
    for filepath in sorted(maps_dir.glob(f"*{MAP_SUFFIX}"),
                           key=lambda p: p.stat().st_mtime, reverse=True):
        result = load_map(str(filepath))
        if result.success:
            maps.append((str(filepath), result.data))
        else:
            logger.warning("Skipping %s: %s", filepath, result.message)
    return maps


def generate_map_filename(name: str = "", directory: Optional[str] = None) -> str:
    """Generate a unique, filesystem-safe path for a new map."""
    safe_name = "".join(c for c in name if c.isalnum() or c in (" ", "-", "_")).strip()
    if not safe_name:
        safe_name = "map"
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return os.path.join(get_maps_directory(directory), f"{safe_name}_{timestamp}{MAP_SUFFIX}")
