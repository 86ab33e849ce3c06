"""Seeded random streams, one per generation step.

Room placement, corridor routing, stair placement and population each draw
from their own ``random.Random``. Every stream is seeded from the master seed
and the step's domain name, so a dungeon is reproducible from its seed and a
step that draws more (or fewer) numbers leaves the other steps' layouts
alone.

Modules fetch their stream once at import time::

    _corridor_rng = rng.get("map.corridors")

and keep it. ``rng.init()`` / ``rng.reset()`` reseed every stream in place,
so those module-level references stay valid across regenerations.

Domains in use: "map.rooms", "map.corridors", "map.stairs" and
"world.population".
"""

from __future__ import annotations

import zlib
from collections.abc import Sequence
from random import Random
from typing import TYPE_CHECKING, TypeAlias, TypeVar

if TYPE_CHECKING:
    from burrow.types import RandomSeed

T = TypeVar("T")


class RNGStream:
    """A stable handle on one domain's stream.

    Draws are forwarded to whatever ``Random`` the provider currently holds
    for the domain, so a handle taken before a reseed keeps working after it.
    """

    def __init__(self, provider: RNGProvider, domain: str) -> None:
        self._provider = provider
        self._domain = domain

    def _current(self) -> Random:
        return self._provider._random_for(self._domain)

    def random(self) -> float:
        return self._current().random()

    def randint(self, a: int, b: int) -> int:
        return self._current().randint(a, b)

    def randrange(self, start: int, stop: int | None = None, step: int = 1) -> int:
        return self._current().randrange(start, stop, step)

    def choices(
        self,
        population: Sequence[T],
        weights: Sequence[float] | None = None,
        *,
        k: int = 1,
    ) -> list[T]:
        return self._current().choices(population, weights=weights, k=k)


# Generation code accepts a plain Random (tests, ``seeded_rng``) or a stream.
RNG: TypeAlias = Random | RNGStream


class RNGProvider:
    """Owns the per-domain ``Random`` instances derived from one master seed."""

    def __init__(self, master_seed: RandomSeed = None) -> None:
        self._master_seed = master_seed
        self._randoms: dict[str, Random] = {}
        self._handles: dict[str, RNGStream] = {}

    @property
    def master_seed(self) -> RandomSeed:
        return self._master_seed

    def get(self, domain: str) -> RNGStream:
        """Return the handle for ``domain``; repeated calls return the same one."""
        handle = self._handles.get(domain)
        if handle is None:
            handle = self._handles[domain] = RNGStream(self, domain)
        return handle

    def _random_for(self, domain: str) -> Random:
        random = self._randoms.get(domain)
        if random is None:
            if self._master_seed is None:
                random = Random()
            else:
                # hash() is salted per process, so derive the seed with crc32.
                key = f"{self._master_seed}:{domain}".encode()
                random = Random(zlib.crc32(key))
            self._randoms[domain] = random
        return random

    def reset(self, master_seed: RandomSeed = None) -> None:
        """Reseed every domain. Handles returned by ``get`` stay valid."""
        self._master_seed = master_seed
        self._randoms.clear()


_provider: RNGProvider | None = None


def init(master_seed: RandomSeed = None) -> None:
    """Seed the shared provider, creating it on first use.

    A ``None`` seed draws from system entropy.
    """
    global _provider
    if _provider is None:
        _provider = RNGProvider(master_seed)
    else:
        _provider.reset(master_seed)


def get(domain: str) -> RNGStream:
    """Handle on the shared provider's stream for ``domain``.

    Safe to call at import time, before ``init()``: the provider starts
    unseeded and ``init()`` later reseeds it in place.
    """
    global _provider
    if _provider is None:
        _provider = RNGProvider(None)
    return _provider.get(domain)


def reset(master_seed: RandomSeed = None) -> None:
    if _provider is None:
        raise RuntimeError("RNG not initialized - call rng.init() first")
    _provider.reset(master_seed)
