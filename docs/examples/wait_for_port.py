"""Wait for a TCP port to accept connections, backing off between attempts.

Run with::

    BACKOFF_SCALE=0.1 BACKOFF_MAX_DELAY=5 BACKOFF_MAX_ITERATIONS=8 \\
        python docs/examples/wait_for_port.py localhost 5432
"""

from __future__ import annotations

import logging
import socket
import sys

from backoff_sequence.config import BackoffSettings, EnvSettingsLoader
from backoff_sequence.log import JsonLoggerFactory, get_logger
from backoff_sequence.retry import RetryPolicy


def main(host: str, port: int) -> int:
    JsonLoggerFactory.configure(level=logging.DEBUG)
    log = get_logger(__name__, host=host, port=port)

    settings = EnvSettingsLoader().load(BackoffSettings)
    policy = RetryPolicy(settings.build, retryable_exceptions=(OSError,))

    def connect() -> None:
        with socket.create_connection((host, port), timeout=2.0):
            pass

    try:
        policy.execute(connect)
    except OSError as exc:
        log.error("port_unavailable", error=str(exc))
        return 1
    log.info("port_ready")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1], int(sys.argv[2])))
