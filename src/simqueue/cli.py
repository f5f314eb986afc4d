"""
Command-line interface: simulate a queue, print the reports, save the history.
"""

from __future__ import annotations

import argparse
import logging
import sys
import time

from simqueue.config import load_config
from simqueue.errors import ConfigError, InvalidParameterError
from simqueue.report import (
    format_elapsed,
    format_errors,
    format_history,
    format_sample_statistics,
    format_simulated,
    format_theoretical,
    write_history_csv,
)
from simqueue.simulator import SimQueue

logger = logging.getLogger("simqueue")

EXIT_INVALID = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="simqueue",
        description="A queue simulator based on stochastic time events.",
    )
    parser.add_argument("--config", type=str, help="YAML configuration file")
    parser.add_argument("--clients", type=int, help="Number of clients to simulate")
    parser.add_argument("--clients-per-hour", type=float, help="Mean number of clients per hour")
    parser.add_argument("--min", dest="service_min", type=float, help="Shortest service time [min]")
    parser.add_argument("--mode", dest="service_mode", type=float, help="Most common service time [min]")
    parser.add_argument("--max", dest="service_max", type=float, help="Longest service time [min]")
    parser.add_argument("--seed", type=int, help="Seed of the uniform generator")
    parser.add_argument("--output", dest="report_path", type=str, help="History file (tab separated)")
    parser.add_argument(
        "--independent-arrays",
        action="store_true",
        help="Lay out service back to back instead of running the event loop",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config).override(
            clients=args.clients,
            clients_per_hour=args.clients_per_hour,
            service_min=args.service_min,
            service_mode=args.service_mode,
            service_max=args.service_max,
            seed=args.seed,
            report_path=args.report_path,
        )
        queue = SimQueue.from_parameters(config.to_parameters(), mg_seed=config.seed)
    except (ConfigError, InvalidParameterError) as e:
        logger.error("%s", e)
        return EXIT_INVALID

    logger.debug("simulating %r (seed %d)", queue, config.seed)
    start = time.perf_counter()
    if args.independent_arrays:
        history = queue.run_independent_arrays()
    else:
        history = queue.run()
    elapsed = time.perf_counter() - start
    snapshot = queue.statistics

    print("\nStochastic generation of Arrival/Service/Leaving times for this simulated queue (FIFO):\n")
    print(format_history(history))
    for block in (
        format_theoretical(snapshot),
        format_simulated(snapshot),
        format_errors(snapshot),
        format_sample_statistics(snapshot),
        format_elapsed(elapsed),
    ):
        print()
        print(block)

    try:
        write_history_csv(config.report_path, history)
    except OSError as e:
        logger.error("cannot write %s: %s", config.report_path, e)
        return 1
    logger.info("history written to %s", config.report_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
