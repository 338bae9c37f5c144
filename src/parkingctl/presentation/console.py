# File: src/parkingctl/presentation/console.py
"""
Console entry point for the Parking Registry

Reads command lines from stdin (or a file), prints one result per command
to stdout and stops at the sentinel line or end of input. Logs go to
stderr so they never mix with command results.
"""

import argparse
import logging
import os
import sys
from typing import Iterable, List, Optional, TextIO

from ..application.commands import CommandDispatcher
from ..application.parking_service import ParkingService
from ..config import AppConfig, load_config
from ..domain.aggregates import ParkingRegistry

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """Setup application logging configuration"""
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True
    )
    return logging.getLogger(__name__)


class ConsoleApplication:
    """Wires the registry, service and dispatcher and runs the command loop"""

    def __init__(self, config: Optional[AppConfig] = None, service: Optional[ParkingService] = None):
        self.config = config or AppConfig()
        self.logger = logging.getLogger(self.__class__.__name__)
        self.setup_components(service)

    def setup_components(self, service: Optional[ParkingService] = None) -> None:
        """Initialize application components with dependency injection"""
        self.service = service or ParkingService(registry=ParkingRegistry())
        self.dispatcher = CommandDispatcher(self.service, separator=self.config.separator)
        self.logger.debug("Components initialized")

    def run(self, lines: Iterable[str], output: TextIO) -> int:
        """
        Process lines until the sentinel or end of input.
        Returns: number of commands processed
        """
        processed = 0
        for line in lines:
            line = line.rstrip("\r\n")
            if line == self.config.sentinel:
                self.logger.info("Sentinel received, stopping")
                break

            output.write(self.dispatcher.dispatch(line) + "\n")
            processed += 1

        output.flush()
        self.logger.info(f"Processed {processed} command(s)")
        return processed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="parkingctl",
        description="Parking spot registry command interpreter"
    )
    parser.add_argument('-i', '--input', help='Read commands from FILE instead of stdin')
    parser.add_argument('-c', '--config', help='YAML configuration file')
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help='Override the configured log level'
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config) if args.config else AppConfig()
    except (OSError, ValueError) as e:
        parser.error(f"cannot load configuration: {e}")

    if args.log_level:
        config = config.model_copy(update={"log_level": args.log_level})

    logger = setup_logging(config.log_level, config.log_file)
    logger.info("Starting parking registry console...")

    app = ConsoleApplication(config)

    if args.input:
        with open(args.input, encoding='utf-8') as stream:
            app.run(stream, sys.stdout)
    else:
        app.run(sys.stdin, sys.stdout)

    return 0


if __name__ == "__main__":
    sys.exit(main())
