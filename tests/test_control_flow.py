"""Tests for control flow instructions."""

import pytest
from chip8vm import execute
from conftest import set_registers


class TestJump:
    """Test jump instructions."""

    def test_execute_jump(self, fresh_state):
        """Test 1NNN - Jump to address."""
        state = execute(fresh_state, 0x1001)
        assert state.pc == 1

    def test_jump_to_highest_address(self, fresh_state):
        state = execute(fresh_state, 0x1FFE)
        assert state.pc == 0xFFE


class TestSkipInstructions:
    """Test all skip instruction variants."""

    def test_skip_if_equal_immediate_true(self, fresh_state):
        """3XNN - Should skip when VX == NN."""
        state = set_registers(fresh_state, V5=0x42)
        initial_pc = state.pc

        state = execute(state, 0x3542)  # Skip if V5 == 0x42
        assert state.pc == initial_pc + 2

    def test_skip_if_equal_immediate_false(self, fresh_state):
        """3XNN - Should not skip when VX != NN."""
        state = set_registers(fresh_state, V5=0x41)
        initial_pc = state.pc

        state = execute(state, 0x3542)
        assert state.pc == initial_pc

    def test_skip_if_not_equal_immediate_true(self, fresh_state):
        """4XNN - Should skip when VX != NN."""
        state = set_registers(fresh_state, V3=0x10)
        initial_pc = state.pc

        state = execute(state, 0x4320)  # Skip if V3 != 0x20
        assert state.pc == initial_pc + 2

    def test_skip_if_not_equal_immediate_false(self, fresh_state):
        """4XNN - Should not skip when VX == NN."""
        state = set_registers(fresh_state, V3=0x20)
        initial_pc = state.pc

        state = execute(state, 0x4320)
        assert state.pc == initial_pc

    def test_skip_if_equal_register_true(self, fresh_state):
        """5XY0 - Should skip when VX == VY."""
        state = set_registers(fresh_state, V1=0x55, V2=0x55)
        initial_pc = state.pc

        state = execute(state, 0x5120)  # Skip if V1 == V2
        assert state.pc == initial_pc + 2

    def test_skip_if_equal_register_false(self, fresh_state):
        """5XY0 - Should not skip when VX != VY."""
        state = set_registers(fresh_state, V1=0x55, V2=0x44)
        initial_pc = state.pc

        state = execute(state, 0x5120)
        assert state.pc == initial_pc

    def test_skip_register_with_nonzero_low_nibble_is_unknown(self, fresh_state):
        """5XY1 is not a valid instruction and never skips."""
        state = set_registers(fresh_state, V1=0x55, V2=0x55)
        initial_pc = state.pc

        state = execute(state, 0x5121)
        assert state.pc == initial_pc

    def test_skip_if_not_equal_register_true(self, fresh_state):
        """9XY0 - Should skip when VX != VY."""
        state = set_registers(fresh_state, V7=0xAA, V8=0xBB)
        initial_pc = state.pc

        state = execute(state, 0x9780)  # Skip if V7 != V8
        assert state.pc == initial_pc + 2

    def test_skip_if_not_equal_register_false(self, fresh_state):
        """9XY0 - Should not skip when VX == VY."""
        state = set_registers(fresh_state, V7=0xCC, V8=0xCC)
        initial_pc = state.pc

        state = execute(state, 0x9780)
        assert state.pc == initial_pc

    def test_skip_with_zero_values(self, fresh_state):
        """V0 == 0 on a fresh machine, so 3000 skips."""
        initial_pc = fresh_state.pc

        state = execute(fresh_state, 0x3000)
        assert state.pc == initial_pc + 2

    def test_skip_boundary_values(self, fresh_state):
        state = set_registers(fresh_state, V0=0xFF)
        initial_pc = state.pc

        state = execute(state, 0x30FF)  # Skip if V0 == 255
        assert state.pc == initial_pc + 2


class TestJumpWithOffset:
    """Test jump with offset under both register choices."""

    def test_jump_with_v0_offset(self, fresh_state):
        """BNNN - Jump to NNN + V0 by default."""
        state = execute(fresh_state, 0x6010)  # V0 = 0x10
        state = execute(state, 0x6230)  # V2 = 0x30
        state = execute(state, 0xB250)  # Jump to 0x250 + V0
        assert state.pc == 0x260

    def test_jump_with_vx_offset(self, vx_jump_state):
        """BXNN - Jump to NNN + VX when configured."""
        state = execute(vx_jump_state, 0x6010)  # V0 = 0x10
        state = execute(state, 0x6230)  # V2 = 0x30
        state = execute(state, 0xB250)  # Jump to 0x250 + V2
        assert state.pc == 0x280

    def test_jump_offset_can_leave_12_bit_range(self, fresh_state):
        """The target is not masked, a jump past memory halts the machine later."""
        state = execute(fresh_state, 0x60FF)
        state = execute(state, 0xBFFF)
        assert state.pc == 0xFFF + 0xFF


class TestKeySkips:
    """Test EX9E and EXA1."""

    def press(self, state, key):
        return state.replace(keypad=state.keypad.at[key].set(True))

    def test_skip_if_key_pressed(self, fresh_state):
        """EX9E - Skip when the key in VX is down."""
        state = self.press(set_registers(fresh_state, V4=0xB), 0xB)
        initial_pc = state.pc

        state = execute(state, 0xE49E)
        assert state.pc == initial_pc + 2

    def test_no_skip_if_key_released(self, fresh_state):
        state = self.press(set_registers(fresh_state, V4=0xB), 0xA)
        initial_pc = state.pc

        state = execute(state, 0xE49E)
        assert state.pc == initial_pc

    def test_skip_if_key_not_pressed(self, fresh_state):
        """EXA1 - Skip when the key in VX is up."""
        state = set_registers(fresh_state, V4=0x3)
        initial_pc = state.pc

        state = execute(state, 0xE4A1)
        assert state.pc == initial_pc + 2

    def test_no_skip_if_key_not_pressed_but_down(self, fresh_state):
        state = self.press(set_registers(fresh_state, V4=0x3), 0x3)
        initial_pc = state.pc

        state = execute(state, 0xE4A1)
        assert state.pc == initial_pc

    def test_unknown_key_instruction_does_nothing(self, fresh_state):
        state = self.press(fresh_state, 0x0)
        initial_pc = state.pc

        state = execute(state, 0xE09F)
        assert state.pc == initial_pc
