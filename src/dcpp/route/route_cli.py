"""Command-line entry point: solve an edge list and print the postman route."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Iterable

from rich.console import Console

from dcpp.ingest.edge_list import EdgeList
from dcpp.ingest.solver_config import SolverConfig
from dcpp.route.route_service import PostmanService, RouteResult
from dcpp.solver.errors import PostmanError

DEFAULT_START = "1"


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Solve the directed Chinese postman problem for an edge list."
    )
    parser.add_argument("edge_file", help="Edge list (text format, or CSV with --csv).")
    parser.add_argument(
        "--csv",
        action="store_true",
        help="Read the edge list as CSV with label,source,target[,weight] columns.",
    )
    parser.add_argument(
        "--start",
        default=None,
        help="Start vertex name (defaults to the config value, then '1', then the first vertex).",
    )
    parser.add_argument("--config", help="Optional solver configuration (YAML or JSON).")
    parser.add_argument(
        "--max-iterations",
        type=int,
        default=None,
        help="Abort cycle canceling after this many cancellations.",
    )
    parser.add_argument("--output-csv", help="Optional path to write the route as CSV.")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Verbosity for the CLI logger.",
    )
    return parser.parse_args(argv)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(message)s",
    )


def run(argv: Iterable[str] | None = None, console: Console | None = None) -> RouteResult:
    """Parse arguments, solve, print the route and return the result."""
    args = parse_args(argv)
    configure_logging(args.log_level)
    console = console or Console()

    try:
        config = SolverConfig.load(args.config) if args.config else SolverConfig()
        if args.max_iterations is not None:
            config.max_iterations = args.max_iterations
        if args.csv:
            edges = EdgeList.from_csv(args.edge_file, default_weight=config.default_weight)
        else:
            edges = EdgeList.from_file(
                args.edge_file, default_weight=config.default_weight, strict=config.strict
            )
        service = PostmanService(edges, config=config)
        start = args.start or config.start_vertex
        if start is None and DEFAULT_START in service.indexer:
            start = DEFAULT_START
        result = service.route_from(start)
    except (PostmanError, ValueError, TypeError, FileNotFoundError) as exc:
        raise SystemExit(str(exc)) from exc

    _print_route(console, result)
    if args.output_csv:
        _write_route_csv(args.output_csv, result)
        logging.info("Route written to %s", args.output_csv)
    return result


def main(argv: Iterable[str] | None = None) -> int:
    run(argv)
    return 0


def _print_route(console: Console, result: RouteResult) -> None:
    console.print(f"Start at vertex '{result.start}'")
    for step in result.steps:
        console.print(f"next walk {step.label} from {step.source} to {step.target}")
    console.print(f"Cost = {result.cost:g}")


def _write_route_csv(path: str | Path, result: RouteResult) -> None:
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    result.route_dataframe.to_csv(output_path, index=False)


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
