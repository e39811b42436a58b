"""Deterministic xorshift PRNG used by CXKK."""

import jax.numpy as jnp


def xorshift32(x: jnp.ndarray) -> jnp.ndarray:
    """Advance a uint32 xorshift state (13, 17, 5)."""
    x = jnp.asarray(x, dtype=jnp.uint32)
    x = x ^ (x << 13)
    x = x ^ (x >> 17)
    x = x ^ (x << 5)
    return x


def random_byte(x: jnp.ndarray) -> tuple[jnp.ndarray, jnp.ndarray]:
    """Return the next state and its low byte."""
    x = xorshift32(x)
    return x, jnp.astype(x & 0xFF, jnp.uint8)
