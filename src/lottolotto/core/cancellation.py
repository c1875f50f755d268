"""Cancellation token shared between the lifecycle controller and the worker."""

import threading


class CancellationToken:
    """One-shot cancellation flag handed to a worker at construction.

    The controller calls cancel(); the worker polls ``cancelled`` before each
    iteration and sleeps through ``wait()`` so that cancellation interrupts
    the sleep immediately.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    @property
    def cancelled(self) -> bool:
        """Return True once cancel() has been called."""
        return self._event.is_set()

    def cancel(self) -> None:
        """Signal cancellation. Calling it more than once is harmless."""
        self._event.set()

    def wait(self, timeout: float | None = None) -> bool:
        """Sleep up to ``timeout`` seconds, waking early on cancellation.

        Args:
            timeout: Seconds to sleep. None blocks until cancelled.

        Returns:
            True if the token was cancelled before or during the wait.
        """
        return self._event.wait(timeout)
