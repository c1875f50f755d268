"""Service configuration."""

import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from lottolotto.core.workload import DEFAULT_WORKLOAD_SIZE

ENV_PREFIX = "LOTTOLOTTO_"


@dataclass(frozen=True)
class ServiceConfig:
    """Settings for MiningService.

    Attributes:
        storage_root: Application storage scope; logs go in a subdirectory.
        data_dir_name: Subdirectory holding the session CSV files.
        default_endpoint: Endpoint used when the start intent supplies none.
        iteration_interval: Seconds slept between iterations.
        refresh_every: Presence notification refresh cadence, in iterations.
        workload_size: Term count of the default benchmark workload.
        wake_lock_timeout: Ceiling, in seconds, on how long the wake lock is held.
        wake_lock_tag: Identifier of the wake lock.
        shutdown_timeout: Seconds stop() waits for the worker to exit.
        max_iterations: Stop the work loop after this many iterations.
    """

    storage_root: Path = field(default_factory=Path.cwd)
    data_dir_name: str = "experiment_data"
    default_endpoint: str = "pool.supportxmr.com:3333"
    iteration_interval: float = 0.1
    refresh_every: int = 50
    workload_size: int = DEFAULT_WORKLOAD_SIZE
    wake_lock_timeout: float = 10 * 60.0
    wake_lock_tag: str = "lottolotto::MiningWakelock"
    shutdown_timeout: float = 1.0
    max_iterations: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "storage_root", Path(self.storage_root))
        if self.iteration_interval < 0:
            raise ValueError("iteration_interval must be >= 0")
        if self.refresh_every < 1:
            raise ValueError("refresh_every must be >= 1")
        if self.workload_size < 0:
            raise ValueError("workload_size must be >= 0")
        if self.wake_lock_timeout <= 0:
            raise ValueError("wake_lock_timeout must be > 0")
        if self.shutdown_timeout < 0:
            raise ValueError("shutdown_timeout must be >= 0")
        if self.max_iterations is not None and self.max_iterations < 0:
            raise ValueError("max_iterations must be >= 0")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ServiceConfig":
        """Build a config from ``LOTTOLOTTO_*`` environment variables.

        Unset variables keep their defaults. For example
        ``LOTTOLOTTO_ITERATION_INTERVAL=0.5`` sets ``iteration_interval``.

        Raises:
            ValueError: If a variable cannot be parsed; the message names it.
        """
        env = os.environ if environ is None else environ
        parsers: dict[str, Callable[[str], Any]] = {
            "storage_root": Path,
            "data_dir_name": str,
            "default_endpoint": str,
            "iteration_interval": float,
            "refresh_every": int,
            "workload_size": int,
            "wake_lock_timeout": float,
            "wake_lock_tag": str,
            "shutdown_timeout": float,
            "max_iterations": int,
        }
        values: dict[str, Any] = {}
        for name, parse in parsers.items():
            key = ENV_PREFIX + name.upper()
            raw = env.get(key)
            if raw is None or raw == "":
                continue
            try:
                values[name] = parse(raw)
            except ValueError as e:
                raise ValueError(f"Invalid value for {key}: {raw!r}") from e
        return cls(**values)

    @property
    def data_dir(self) -> Path:
        return self.storage_root / self.data_dir_name
