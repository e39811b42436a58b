"""CHIP-8 instruction decoding."""

from chex import dataclass


@dataclass(frozen=True)
class DecodedInstruction:
    """Decoded CHIP-8 instruction with extracted operands."""
    raw: int
    opcode: int  # First nibble
    x: int       # Second nibble (VX register)
    y: int       # Third nibble (VY register)
    n: int       # Fourth nibble (4-bit immediate, sprite height)
    nn: int      # Last byte (8-bit immediate)
    nnn: int     # Last 12 bits (12-bit address)


def nibbles(instruction: int) -> tuple[int, int, int, int]:
    """Split a 16-bit instruction into its four nibbles, most significant first."""
    return (
        (instruction & 0xF000) >> 12,
        (instruction & 0x0F00) >> 8,
        (instruction & 0x00F0) >> 4,
        instruction & 0x000F,
    )


def decode(instruction: int) -> DecodedInstruction:
    """Decode 16-bit instruction into components."""
    return DecodedInstruction(
        raw=instruction,
        opcode=(instruction & 0xF000) >> 12,
        x=(instruction & 0x0F00) >> 8,
        y=(instruction & 0x00F0) >> 4,
        n=instruction & 0x000F,
        nn=instruction & 0x00FF,
        nnn=instruction & 0x0FFF
    )


# (mask, value) pairs, one per recognised instruction.
INSTRUCTION_PATTERNS = (
    (0xFFFF, 0x0000),  # NOP
    (0xFFFF, 0x00E0),  # CLS
    (0xFFFF, 0x00EE),  # RET
    (0xF000, 0x1000),  # JP
    (0xF000, 0x2000),  # CALL
    (0xF000, 0x3000),  # SE VX, KK
    (0xF000, 0x4000),  # SNE VX, KK
    (0xF00F, 0x5000),  # SE VX, VY
    (0xF000, 0x6000),  # LD VX, KK
    (0xF000, 0x7000),  # ADD VX, KK
    (0xF00F, 0x8000),  # LD VX, VY
    (0xF00F, 0x8001),  # OR
    (0xF00F, 0x8002),  # AND
    (0xF00F, 0x8003),  # XOR
    (0xF00F, 0x8004),  # ADD VX, VY
    (0xF00F, 0x8005),  # SUB
    (0xF00F, 0x8006),  # SHR
    (0xF00F, 0x8007),  # SUBN
    (0xF00F, 0x800E),  # SHL
    (0xF00F, 0x9000),  # SNE VX, VY
    (0xF000, 0xA000),  # LD I
    (0xF000, 0xB000),  # JP V0
    (0xF000, 0xC000),  # RND
    (0xF000, 0xD000),  # DRW
    (0xF0FF, 0xE09E),  # SKP
    (0xF0FF, 0xE0A1),  # SKNP
    (0xF0FF, 0xF007),  # LD VX, DT
    (0xF0FF, 0xF00A),  # LD VX, K
    (0xF0FF, 0xF015),  # LD DT, VX
    (0xF0FF, 0xF018),  # LD ST, VX
    (0xF0FF, 0xF01E),  # ADD I, VX
    (0xF0FF, 0xF029),  # LD F, VX
    (0xF0FF, 0xF033),  # LD B, VX
    (0xF0FF, 0xF055),  # LD [I], VX
    (0xF0FF, 0xF065),  # LD VX, [I]
)


def is_known_instruction(instruction: int) -> bool:
    """Check whether any opcode handler matches this instruction."""
    return any(instruction & mask == value for mask, value in INSTRUCTION_PATTERNS)
