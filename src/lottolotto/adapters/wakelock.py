"""Wake lock adapters implementing WakeLockPort.

A wake lock is always taken with a timeout so that a session that is never
stopped cannot keep the machine awake forever.
"""

import logging
import math
import shutil
import subprocess
import sys
import threading
from collections.abc import Callable

logger = logging.getLogger(__name__)

# Seconds to wait for an inhibitor process to exit before killing it.
_TERMINATE_TIMEOUT = 5.0

CommandFactory = Callable[[float, str], list[str] | None]


class TimedWakeLock:
    """In-process wake lock that expires on a timer.

    It has no effect on the operating system; it models the hold for hosts
    that have no sleep inhibitor, and for tests.
    """

    def __init__(self, tag: str) -> None:
        self.tag = tag
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._held = False

    @property
    def is_held(self) -> bool:
        with self._lock:
            return self._held

    def acquire(self, timeout: float) -> None:
        """Take the hold, replacing any previous expiry timer."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = threading.Timer(timeout, self._expire)
            self._timer.daemon = True
            self._held = True
            self._timer.start()
        logger.debug("Wake lock acquired", extra={"tag": self.tag, "timeout": timeout})

    def release(self) -> None:
        with self._lock:
            if not self._held:
                return
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            self._held = False
        logger.debug("Wake lock released", extra={"tag": self.tag})

    def _expire(self) -> None:
        with self._lock:
            self._held = False
            self._timer = None
        logger.info("Wake lock expired", extra={"tag": self.tag})


def inhibitor_command(
    timeout: float, tag: str, platform: str | None = None
) -> list[str] | None:
    """Build the sleep-inhibitor command line for the current platform.

    The command itself exits after ``timeout`` seconds.

    Returns:
        The argv list, or None on platforms without a known inhibitor.
    """
    platform = platform or sys.platform
    seconds = str(max(1, math.ceil(timeout)))
    if platform == "darwin":
        return ["caffeinate", "-i", "-t", seconds]
    if platform.startswith("linux"):
        return [
            "systemd-inhibit",
            "--what=sleep:idle",
            f"--who={tag}",
            "--why=Experiment running",
            "--mode=block",
            "sleep",
            seconds,
        ]
    return None


class CommandWakeLock:
    """Wake lock held by a sleep-inhibitor child process.

    The child process (``caffeinate`` or ``systemd-inhibit``) exits on its
    own when the timeout elapses. Spawn failures are logged and leave the
    lock unheld.
    """

    def __init__(
        self, tag: str, command_factory: CommandFactory = inhibitor_command
    ) -> None:
        self.tag = tag
        self._command_factory = command_factory
        self._proc: subprocess.Popen[bytes] | None = None

    @property
    def is_held(self) -> bool:
        return self._proc is not None and self._proc.poll() is None

    def acquire(self, timeout: float) -> None:
        if self._proc is not None:
            self.release()
        argv = self._command_factory(timeout, self.tag)
        if argv is None:
            logger.warning("No sleep inhibitor available", extra={"tag": self.tag})
            return
        try:
            self._proc = subprocess.Popen(
                argv,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError:
            logger.exception("Failed to start sleep inhibitor", extra={"command": argv[0]})
            return
        logger.debug("Wake lock acquired", extra={"tag": self.tag, "pid": self._proc.pid})

    def release(self) -> None:
        proc = self._proc
        if proc is None:
            return
        self._proc = None
        if proc.poll() is not None:
            return
        proc.terminate()
        try:
            proc.wait(timeout=_TERMINATE_TIMEOUT)
        except subprocess.TimeoutExpired:
            proc.kill()
            proc.wait()
        logger.debug("Wake lock released", extra={"tag": self.tag})


def default_wake_lock(tag: str) -> CommandWakeLock | TimedWakeLock:
    """Return a CommandWakeLock if an inhibitor is installed, else a TimedWakeLock."""
    argv = inhibitor_command(1, tag)
    if argv is not None and shutil.which(argv[0]):
        return CommandWakeLock(tag)
    return TimedWakeLock(tag)
