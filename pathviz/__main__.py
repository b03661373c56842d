"""Command-line entry point for the PathViz search engine."""

import argparse
import logging
import sys
from typing import List, Optional, Tuple

from .domain.grid import Grid
from .domain.runner import AlgorithmKind, SearchResult, create_search, run_to_completion
from .domain.types import Coord, NeighborMode, SearchConfig, SearchStatus
from .app.text_view import render
from .utils import map_io
from .utils.grid_factory import build_demo_grid, generate_solvable_grid

logger = logging.getLogger("pathviz")

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NO_PATH = 2


def _add_search_options(parser: argparse.ArgumentParser):
    parser.add_argument("--map", type=str, help="Path to a PATHVIZ map file (default: demo map)")
    parser.add_argument("--eight", action="store_true", help="Allow diagonal moves")
    parser.add_argument("--weights", action="store_true", help="Use cell costs as edge costs")
    parser.add_argument("--corner-cutting", action="store_true",
                        help="Allow diagonal moves past blocked corners")
    parser.add_argument("--turn-penalty", type=int, default=0,
                        help="Extra cost per direction change (A* only, 0 disables)")
    parser.add_argument("--steps-per-tick", type=int, default=1,
                        help="Expansions per step() call")
    parser.add_argument("--quiet", action="store_true", help="Do not print the final grid")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pathviz", description="Stepwise grid shortest-path search")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="Run one algorithm to completion")
    run.add_argument("--algorithm", choices=[k.value for k in AlgorithmKind],
                     default=AlgorithmKind.ASTAR.value)
    run.add_argument("--animate", action="store_true",
                     help="Drive stepping from a Qt timer instead of a plain loop")
    _add_search_options(run)

    compare = sub.add_parser("compare", help="Run both algorithms on the same map")
    _add_search_options(compare)

    demo = sub.add_parser("demo", help="Write the demo map to a file")
    demo.add_argument("output", type=str)

    generate = sub.add_parser("generate", help="Write a random solvable map to a file")
    generate.add_argument("output", type=str)
    generate.add_argument("--width", type=int, default=30)
    generate.add_argument("--height", type=int, default=20)
    generate.add_argument("--density", type=float, default=0.3)
    generate.add_argument("--seed", type=int, default=None)
    generate.add_argument("--weighted", action="store_true", help="Randomize cell costs")

    return parser


def config_from_args(args: argparse.Namespace) -> SearchConfig:
    return SearchConfig(
        neighbor_mode=NeighborMode.EIGHT if args.eight else NeighborMode.FOUR,
        use_weights=args.weights,
        allow_corner_cutting=args.corner_cutting,
        penalize_turns=args.turn_penalty > 0,
        turn_penalty=max(1, args.turn_penalty),
    )


def load_grid(path: Optional[str]) -> Optional[Tuple[Grid, Coord, Coord]]:
    """Load the map at path, or the demo map when path is None."""
    if path is None:
        return build_demo_grid()
    result = map_io.load_map(path)
    if not result:
        logger.error("Cannot load %s: %s", path, result.message)
        return None
    return result.data.grid, result.data.start, result.data.goal


def format_result(result: SearchResult) -> str:
    cost = result.path_cost if result.path_cost is not None else "-"
    return (f"{result.algorithm:<9} status={result.status.value:<8} "
            f"expansions={result.expansions:<6} path_length={result.path_length:<4} "
            f"cost={cost} time={result.elapsed_ms:.2f}ms")


def _exit_code(results: List[SearchResult]) -> int:
    if any(r.status == SearchStatus.FOUND for r in results):
        return EXIT_OK
    if any(r.status == SearchStatus.NO_PATH for r in results):
        return EXIT_NO_PATH
    return EXIT_ERROR


def cmd_run(args: argparse.Namespace) -> int:
    loaded = load_grid(args.map)
    if loaded is None:
        return EXIT_ERROR
    grid, start, goal = loaded
    config = config_from_args(args)
    kind = AlgorithmKind(args.algorithm)

    if args.animate:
        return _run_animated(args, kind, config)

    search = create_search(kind)
    if not search.reset(grid, start, goal, config):
        logger.error("Search rejected: start %s or goal %s is out of bounds or blocked", start, goal)
        return EXIT_ERROR

    result = run_to_completion(search, iterations_per_step=max(1, args.steps_per_tick))
    if not args.quiet:
        print(render(grid, search.snapshot, start, goal))
    print(format_result(result))
    return _exit_code([result])


def _run_animated(args: argparse.Namespace, kind: AlgorithmKind, config: SearchConfig) -> int:
    """Run through SearchController so a QTimer drives step() between event-loop turns."""
    from PySide6.QtCore import QCoreApplication
    from .app.controller import SearchController

    app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])
    controller = SearchController(kind)
    errors: List[str] = []
    controller.error_occurred.connect(errors.append)

    if args.map and not controller.load_map(args.map):
        logger.error("Cannot load %s: %s", args.map, errors[-1] if errors else "unknown error")
        return EXIT_ERROR
    controller.set_steps_per_tick(args.steps_per_tick)
    if not controller.update_config(**vars(config)):
        return EXIT_ERROR

    results: List[SearchResult] = []
    controller.search_finished.connect(results.append)
    controller.search_finished.connect(lambda _: app.quit())
    controller.step_completed.connect(
        lambda status: logger.debug("tick: %s, %d expansions", status.value, controller.search.expansions))

    if not controller.play():
        logger.error("Search rejected: %s", controller.playback_state.value)
        return EXIT_ERROR

    app.exec()
    controller.cleanup()

    if not args.quiet:
        print(render(controller.grid, controller.snapshot, controller.start, controller.goal))
    for result in results:
        print(format_result(result))
    return _exit_code(results)


def cmd_compare(args: argparse.Namespace) -> int:
    loaded = load_grid(args.map)
    if loaded is None:
        return EXIT_ERROR
    grid, start, goal = loaded
    config = config_from_args(args)

    results = []
    for kind in AlgorithmKind:
        # Independent grids keep the two runs free of shared state
        lane_grid = grid.copy()
        search = create_search(kind)
        if not search.reset(lane_grid, start, goal, config):
            logger.error("Search rejected: start %s or goal %s is out of bounds or blocked", start, goal)
            return EXIT_ERROR
        result = run_to_completion(search, iterations_per_step=max(1, args.steps_per_tick))
        results.append(result)
        if not args.quiet:
            print(f"== {search.name}")
            print(render(lane_grid, search.snapshot, start, goal))

    for result in results:
        print(format_result(result))
    return _exit_code(results)


def cmd_demo(args: argparse.Namespace) -> int:
    grid, start, goal = build_demo_grid()
    result = map_io.save_map(grid, start, goal, map_io.ensure_map_suffix(args.output))
    if not result:
        logger.error("Cannot save demo map: %s", result.message)
        return EXIT_ERROR
    return EXIT_OK


def cmd_generate(args: argparse.Namespace) -> int:
    try:
        grid, start, goal = generate_solvable_grid(
            args.width, args.height, args.density, seed=args.seed, weighted=args.weighted)
    except ValueError as e:
        logger.error("Cannot generate map: %s", e)
        return EXIT_ERROR

    result = map_io.save_map(grid, start, goal, map_io.ensure_map_suffix(args.output))
    if not result:
        logger.error("Cannot save generated map: %s", result.message)
        return EXIT_ERROR
    return EXIT_OK


COMMANDS = {
    "run": cmd_run,
    "compare": cmd_compare,
    "demo": cmd_demo,
    "generate": cmd_generate,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the command line."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return COMMANDS[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
