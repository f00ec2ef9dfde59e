"""
Random number generation utilities.

Terrain code never touches Python's global ``random`` module. Everything
draws from an injected source, falling back to the process-wide Alea PRNG
managed here.
"""

from typing import Optional

from ..core.alea_prng import AleaPRNG, Seed

# Global PRNG instance
_prng: Optional[AleaPRNG] = None


def set_random_seed(seed: Seed) -> AleaPRNG:
    """
    Reset the process-wide PRNG with a new seed.

    Args:
        seed: Seed string or number

    Returns:
        The freshly seeded AleaPRNG instance
    """
    global _prng
    _prng = AleaPRNG(seed)
    return _prng


def get_prng() -> AleaPRNG:
    """
    Get the process-wide PRNG, creating a default-seeded one on first use.

    Returns:
        AleaPRNG instance
    """
    global _prng
    if _prng is None:
        _prng = AleaPRNG("default")
    return _prng


def uniform(rng, low: float, high: float) -> float:
    """Draw from [low, high) using any source with a ``random()`` method."""
    return low + rng.random() * (high - low)
