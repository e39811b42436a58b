"""CHIP-8 emulator state structures."""

import jax.numpy as jnp
from flax.struct import dataclass, PyTreeNode, field

from chip8vm.config import MachineConfig
from chip8vm.constants import NUM_KEYS, NUM_REGISTERS, STACK_SIZE


@dataclass
class StackState:
    """Stack state for subroutine calls."""
    data: jnp.ndarray = field(default_factory=lambda: jnp.zeros(STACK_SIZE, dtype=jnp.uint32))
    pointer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.int32))


class EmulatorState(PyTreeNode):
    """Main CHIP-8 emulator state.

    ``display`` is indexed ``[x, y]``. ``V[0xF]`` doubles as the carry, borrow
    and collision flag and is overwritten by the opcodes that produce one.
    ``pc`` and the return addresses are ``uint32`` so that advancing past the
    last word of a 64 KiB memory does not wrap to 0.
    """
    memory: jnp.ndarray
    display: jnp.ndarray
    rng: jnp.ndarray
    pc: jnp.ndarray
    stack: StackState = field(default_factory=StackState)
    delay_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    sound_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    keypad: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_KEYS, dtype=jnp.bool_))
    V: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8))
    I: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint16))
    config: MachineConfig = field(pytree_node=False, default=MachineConfig())

    @property
    def memory_size(self) -> int:
        return self.memory.shape[0]

    @property
    def display_size(self) -> tuple[int, int]:
        """Display (width, height)."""
        return self.display.shape


def create_state(config: MachineConfig = MachineConfig()) -> EmulatorState:
    """Create initial emulator state with font data loaded."""
    font = jnp.array(config.font_data, dtype=jnp.uint8)
    memory = jnp.zeros(config.memory_size, dtype=jnp.uint8)
    return EmulatorState(
        memory=memory.at[config.font_start:config.font_end].set(font),
        display=jnp.zeros((config.display_width, config.display_height), dtype=jnp.bool_),
        rng=jnp.asarray(config.random_seed, dtype=jnp.uint32),
        pc=jnp.asarray(config.program_start, dtype=jnp.uint32),
        config=config,
    )
