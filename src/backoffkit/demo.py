"""
Demonstration of the retry loop with an operation that always fails.

Run with ``python -m backoffkit``.
"""

import argparse
import logging
from typing import Sequence

from .exceptions import RetryError
from .retry import RetryConfig, retry

DEMO_CONFIG = RetryConfig(
    delay_factor=0.2,
    randomization_factor=0.25,
    max_delay=30.0,
    max_attempts=8,
    timeout=300.0,
)


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="backoffkit",
        description="Retry an always-failing operation and print each attempt.",
    )
    parser.add_argument("--quick", action="store_true", help="use a 10ms delay factor")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None, config: RetryConfig | None = None) -> int:
    args = _parse_args(argv)
    setup_logging(args.verbose)

    config = config or DEMO_CONFIG
    if args.quick:
        config = config.with_overrides(delay_factor=0.01)

    def operation() -> None:
        print("Trying...")
        raise RuntimeError("failed")

    def on_retry(attempt: int, err: Exception) -> None:
        print(f"Attempt {attempt} failed: {err}")

    def on_timeout() -> None:
        print("Retry timed out")

    try:
        retry(
            operation,
            config,
            retry_if=lambda err: True,
            on_retry=on_retry,
            on_timeout=on_timeout,
        )
    except (RuntimeError, RetryError) as e:
        print(f"Failed after {config.max_attempts} attempts: {e}")
        return 1

    return 0
