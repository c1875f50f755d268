"""Run the experiment service from a terminal.

Acts as the host environment: issues the create and start-command
callbacks, waits for Ctrl-C / SIGTERM (or for a bounded run to finish)
and then issues destroy.

    python examples/run_experiment.py --pool pool.example.com:3333
    LOTTOLOTTO_MAX_ITERATIONS=200 python examples/run_experiment.py
"""

import argparse
import dataclasses
import signal
import threading
from pathlib import Path

from lottolotto import MiningService, ServiceConfig, get_logger, setup_logging

logger = get_logger("examples.run_experiment")


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the lottolotto experiment service")
    parser.add_argument("--pool", help="target endpoint (default from config)")
    parser.add_argument(
        "--storage-root", type=Path, help="directory that receives experiment_data/"
    )
    parser.add_argument(
        "--log-level", help="log level (default $LOTTOLOTTO_LOG_LEVEL or INFO)"
    )
    args = parser.parse_args()

    setup_logging(args.log_level)
    config = ServiceConfig.from_env()
    if args.storage_root is not None:
        config = dataclasses.replace(config, storage_root=args.storage_root)

    stop_requested = threading.Event()

    def _request_stop(signum: int, frame: object) -> None:
        logger.info("Received %s", signal.Signals(signum).name)
        stop_requested.set()

    signal.signal(signal.SIGINT, _request_stop)
    signal.signal(signal.SIGTERM, _request_stop)

    service = MiningService(config)
    service.on_create()
    intent = {"pool_url": args.pool} if args.pool else None
    service.on_start_command(intent)

    # A bounded run ends on its own; an unbounded one waits for a signal.
    while not stop_requested.wait(1.0):
        if service.wait(0):
            break
    logger.info("Final stats", extra=service.stats())
    service.on_destroy()


if __name__ == "__main__":
    main()
