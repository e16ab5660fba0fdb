# Copyright (c) 2026 - 2026, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""Cooperative cancellation of an installation.

Privileged steps are never interrupted while they run; the token is checked between
steps so that a cancelled installation stops before the next privileged action starts.
"""

import logging
import signal
import threading
from types import FrameType

from javatoolinstaller.errors import InstallCancelledError

logger: logging.Logger = logging.getLogger(__name__)


class CancellationToken:
    """Thread-safe cancellation flag for cooperative cancellation."""

    def __init__(self) -> None:
        self._is_cancelled = threading.Event()

    def cancel(self) -> None:
        """Signal that cancellation has been requested."""
        self._is_cancelled.set()

    def is_cancelled(self) -> bool:
        """Return True if cancellation has been requested."""
        return self._is_cancelled.is_set()

    def raise_if_cancelled(self, next_step: str) -> None:
        """Raise if cancellation has been requested before ``next_step`` starts.

        Raises
        ------
        InstallCancelledError
            If the token has been cancelled.
        """
        if self.is_cancelled():
            raise InstallCancelledError(f"The installation was cancelled before: {next_step}.")


def install_signal_handlers(token: CancellationToken) -> None:
    """Cancel ``token`` when the process receives SIGINT or SIGTERM."""

    def _handler(signum: int, _frame: FrameType | None) -> None:
        logger.warning("Received signal %s. The installation stops after the current step.", signum)
        token.cancel()

    signal.signal(signal.SIGINT, _handler)
    signal.signal(signal.SIGTERM, _handler)
