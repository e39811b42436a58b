"""Test configuration and fixtures for CHIP-8 machine tests."""

import io

import pytest
import jax.numpy as jnp
from chip8vm import Machine, MachineConfig, create_state
from chip8vm.logging import MachineLogger


class FakeClock:
    """Manually advanced clock whose sleep moves time forward."""

    def __init__(self, start: float = 0.0):
        self.now = start
        self.sleeps = []

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds

    def sleep(self, seconds: float):
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def fresh_state():
    """Provide a fresh emulator state for each test."""
    return create_state()


@pytest.fixture
def vy_shift_state():
    """State whose shifts read VY."""
    return create_state(MachineConfig(shift_uses_vy=True))


@pytest.fixture
def incrementing_state():
    """State whose FX55/FX65 advance I."""
    return create_state(MachineConfig(increment_index_on_store=True))


@pytest.fixture
def vx_jump_state():
    """State whose BXNN adds VX."""
    return create_state(MachineConfig(jump_uses_vx=True))


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def log_stream():
    return io.StringIO()


@pytest.fixture
def make_machine(clock, log_stream):
    """Build unthrottled machines on the fake clock, logging into log_stream."""
    def _make(program: bytes = b"", **config_changes):
        config = MachineConfig(instructions_per_second=None).replace(**config_changes)
        logger = MachineLogger(log_level="DEBUG", stream=log_stream, use_colors=False)
        machine = Machine(config, logger=logger, clock=clock, sleep=clock.sleep)
        if program:
            machine.load_program(program)
        return machine
    return _make


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )


def set_registers(state, **registers):
    """Helper to set registers by name, e.g. set_registers(state, V1=3, VF=1)."""
    V = state.V
    for name, value in registers.items():
        V = V.at[int(name[1:], 16)].set(value)
    return state.replace(V=V)


def program(*instructions: int) -> bytes:
    """Assemble 16-bit instructions into big-endian program bytes."""
    return b"".join(instruction.to_bytes(2, "big") for instruction in instructions)
