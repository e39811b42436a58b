"""Immutable machine configuration."""

from typing import Optional, Tuple

from flax.struct import dataclass, field

from chip8vm.constants import (
    FONT_BYTES, FONT_GLYPH_SIZE, FONT_START, HIRES_SCREEN_HEIGHT, HIRES_SCREEN_WIDTH,
    INSTRUCTIONS_PER_SECOND, MAX_MEMORY_SIZE,
    MEMORY_SIZE, PROGRAM_START, RANDOM_SEED, SCREEN_HEIGHT, SCREEN_WIDTH,
)
from chip8vm.errors import ConfigurationError


@dataclass
class MachineConfig:
    """Tunable machine parameters.

    All fields are static: a config is hashable and is carried on every
    ``EmulatorState`` without becoming part of the traced pytree.

    Attributes:
        instructions_per_second: Pacing rate. ``None`` or ``0`` runs unthrottled.
        memory_size: Size of addressable memory in bytes.
        program_start: Address programs are loaded at and execution starts from.
        display_width: Display width in pixels (128 for hi-res).
        display_height: Display height in pixels (64 for hi-res).
        font_data: Hex digit glyphs, five bytes per glyph.
        font_start: Memory address of the first glyph.
        increment_index_on_store: FX55/FX65 leave I pointing past the last register.
        shift_uses_vy: 8XY6/8XYE shift VY into VX instead of shifting VX in place.
        jump_uses_vx: BXNN jumps to NNN + VX instead of NNN + V0.
        random_seed: Initial xorshift state, must be non-zero.
    """
    instructions_per_second: Optional[int] = field(pytree_node=False, default=INSTRUCTIONS_PER_SECOND)
    memory_size: int = field(pytree_node=False, default=MEMORY_SIZE)
    program_start: int = field(pytree_node=False, default=PROGRAM_START)
    display_width: int = field(pytree_node=False, default=SCREEN_WIDTH)
    display_height: int = field(pytree_node=False, default=SCREEN_HEIGHT)
    font_data: Tuple[int, ...] = field(pytree_node=False, default=FONT_BYTES)
    font_start: int = field(pytree_node=False, default=FONT_START)
    increment_index_on_store: bool = field(pytree_node=False, default=False)
    shift_uses_vy: bool = field(pytree_node=False, default=False)
    jump_uses_vx: bool = field(pytree_node=False, default=False)
    random_seed: int = field(pytree_node=False, default=RANDOM_SEED)

    def __post_init__(self):
        # Lists would make the config unhashable.
        object.__setattr__(self, "font_data", tuple(int(b) for b in self.font_data))
        self.validate()

    def validate(self):
        """Raise ConfigurationError on an impossible combination of options."""
        if self.display_width < 8 or self.display_height < 1:
            raise ConfigurationError(
                f"Display must be at least 8x1 pixels, got {self.display_width}x{self.display_height}"
            )
        if not 0 < self.program_start < self.memory_size <= MAX_MEMORY_SIZE:
            raise ConfigurationError(
                f"Need 0 < program_start (0x{self.program_start:X}) < memory_size "
                f"({self.memory_size}) <= {MAX_MEMORY_SIZE}"
            )
        if len(self.font_data) < 16 * FONT_GLYPH_SIZE or len(self.font_data) % FONT_GLYPH_SIZE:
            raise ConfigurationError(
                f"Font data must hold 16 glyphs of {FONT_GLYPH_SIZE} bytes, got {len(self.font_data)} bytes"
            )
        if any(not 0 <= b <= 0xFF for b in self.font_data):
            raise ConfigurationError("Font data must be bytes")
        if self.font_start < 0 or self.font_end > self.program_start:
            raise ConfigurationError(
                f"Font region 0x{self.font_start:X}..0x{self.font_end:X} must lie below "
                f"program start 0x{self.program_start:X}"
            )
        if not 0 < self.random_seed <= 0xFFFFFFFF:
            raise ConfigurationError(f"Random seed must be a non-zero 32-bit value, got {self.random_seed}")
        if self.instructions_per_second is not None and self.instructions_per_second < 0:
            raise ConfigurationError(
                f"Instruction rate must not be negative, got {self.instructions_per_second}"
            )

    @property
    def font_end(self) -> int:
        """Address one past the last font byte."""
        return self.font_start + len(self.font_data)

    @property
    def program_capacity(self) -> int:
        return self.memory_size - self.program_start

    @property
    def instruction_delay(self) -> float:
        """Minimum seconds between two instructions, 0.0 when unthrottled."""
        if not self.instructions_per_second:
            return 0.0
        return 1.0 / self.instructions_per_second

    def hires(self) -> "MachineConfig":
        """Return a copy with the 128x64 display."""
        return self.replace(display_width=HIRES_SCREEN_WIDTH, display_height=HIRES_SCREEN_HEIGHT)

    def build(self, **kwargs):
        """Create a Machine from this configuration."""
        from chip8vm.machine import Machine
        return Machine(self, **kwargs)
