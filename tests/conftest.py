from __future__ import annotations

from collections.abc import Iterator

import pytest

from burrow.util import rng

TEST_SEED = "test-seed"


@pytest.fixture(autouse=True)
def deterministic_rng() -> Iterator[None]:
    """Reset every RNG stream to a fixed seed before and after each test."""
    rng.init(TEST_SEED)
    yield
    rng.init(TEST_SEED)
