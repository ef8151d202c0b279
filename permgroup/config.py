from __future__ import annotations

import contextlib
import dataclasses
from dataclasses import dataclass
from typing import Iterator, Literal, Optional


@dataclass(frozen=True)
class Config:
    # 'deterministic': incremental Schreier-Sims, every Schreier generator
    #                  of every level is sifted.
    # 'random':        sift random elements until `exit_rounds` of them in a
    #                  row are already members, then verify deterministically.
    method: Literal['deterministic', 'random'] = 'deterministic'

    # Bound on the main loop of Schreier-Sims. None derives it from the
    # degree as (degree + 1) ** 3.
    max_iterations: Optional[int] = None

    # Exit the random variant after the given number of rounds without
    # progress.
    exit_rounds: int = 10

    # Parameters for product replacement random element generation.
    rng_accus: int = 5
    rng_extra_slots: int = 5
    rng_scramble: int = 30
    rng_scramble_factor: int = 4

    seed: Optional[int] = 0

    def iteration_bound(self, degree: int) -> int:
        if self.max_iterations is not None:
            return self.max_iterations
        return (degree + 1)**3


__config = Config()


def get_config() -> Config:
    return __config


def set_config(cfg: Config) -> None:
    global __config
    if not isinstance(cfg, Config):
        raise TypeError(f"expected Config, got {type(cfg).__name__}")
    __config = cfg


@contextlib.contextmanager
def configure(**changes) -> Iterator[Config]:
    """Temporarily replace fields of the global configuration.

    >>> with configure(method='random') as cfg:
    ...     cfg.method
    'random'
    """
    old = get_config()
    cfg = dataclasses.replace(old, **changes)
    set_config(cfg)
    try:
        yield cfg
    finally:
        set_config(old)
