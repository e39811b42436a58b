"""CHIP-8 delay and sound timers."""

import jax.numpy as jnp

from chip8vm.state import EmulatorState


def tick_timers(state: EmulatorState, ticks: int = 1) -> EmulatorState:
    """Decrement both timers by ``ticks``, saturating at zero."""
    def _tick(timer):
        return jnp.astype(jnp.maximum(jnp.astype(timer, jnp.int32) - ticks, 0), jnp.uint8)

    return state.replace(delay_timer=_tick(state.delay_timer), sound_timer=_tick(state.sound_timer))
