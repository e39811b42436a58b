"""Stateful CHIP-8 machine driven one instruction at a time by a host loop."""

import os
import time
from typing import Callable, Iterable, Optional, Union

import jax.numpy as jnp
import numpy as np

from chip8vm.config import MachineConfig
from chip8vm.constants import NUM_KEYS, TIMER_FREQUENCY, TIMER_PERIOD
from chip8vm.decode import is_known_instruction
from chip8vm.emulator import can_fetch, execute, fetch, load_rom, read_rom
from chip8vm.errors import StackError
from chip8vm.logging import MachineLogger, build_progress_bar
from chip8vm.state import EmulatorState, create_state
from chip8vm.timers import tick_timers


class Machine:
    """CHIP-8 virtual machine.

    A host loop sets keys, calls :meth:`step`, then reads :attr:`display`.
    Timers tick at 60 Hz of wall-clock time whatever the instruction rate, and
    each step sleeps as needed to hold ``config.instructions_per_second``.

    Args:
        config: Machine parameters.
        logger: Logger for machine events. Defaults to a warning-level MachineLogger.
        clock: Monotonic clock in seconds.
        sleep: Blocking sleep used for pacing.
        on_beep: Called once per timer tick while the sound timer is non-zero.
    """

    def __init__(
        self,
        config: MachineConfig = MachineConfig(),
        *,
        logger: Optional[MachineLogger] = None,
        clock: Callable[[], float] = time.perf_counter,
        sleep: Callable[[float], None] = time.sleep,
        on_beep: Optional[Callable[[], None]] = None,
    ):
        self.config = config
        self.logger = logger if logger is not None else MachineLogger()
        self.on_beep = on_beep
        self._clock = clock
        self._sleep = sleep
        self._program = b""
        self.reset()

    def reset(self):
        """Restore the power-on state, keeping the loaded program."""
        self.state: EmulatorState = create_state(self.config)
        if self._program:
            self.state = load_rom(self.state, self._program)
        self.instruction_count = 0
        self.unknown_instructions = 0
        self.beep_count = 0
        self._halted = False
        now = self._clock()
        self._last_timer_tick = now
        self._last_instruction_time = now

    # Program loading

    def load_program(self, data: bytes):
        """Copy a program into memory at ``config.program_start``.

        Raises:
            ProgramTooLargeError: Nothing is written.
        """
        data = bytes(data)
        self.state = load_rom(self.state, data)
        self._program = data
        self.logger.log_program_loaded(len(data), self.config.program_start, self.config.program_capacity)

    def load_program_from_path(self, path: Union[str, os.PathLike]):
        """Read a program file and load it.

        Raises:
            ProgramIOError: The file could not be read.
            ProgramTooLargeError: Nothing is written.
        """
        self.load_program(read_rom(path))

    # Execution

    def step(self) -> bool:
        """Run one fetch-decode-execute cycle, then update timers and pace.

        Returns:
            False when the next instruction lies outside memory, in which case
            nothing changes.

        Raises:
            StackError: CALL on a full stack or RET on an empty one. The state
                is left as it was before the step.
        """
        if not can_fetch(self.state):
            if not self._halted:
                self.logger.log_halt(int(self.state.pc), self.state.memory_size, self.instruction_count)
                self._halted = True
            return False

        address = int(self.state.pc)
        state, instruction = fetch(self.state)
        instruction = int(instruction)
        if not is_known_instruction(instruction):
            self.unknown_instructions += 1
            self.logger.log_unknown_instruction(instruction, address)

        try:
            state = execute(state, instruction)
        except StackError as e:
            self.logger.log_stack_fault(e, address)
            raise

        self.state = state
        self.instruction_count += 1
        self.update_timers()
        self._pace()
        return True

    def run(self, max_steps: Optional[int] = None, progress: bool = False) -> int:
        """Step until the machine halts or ``max_steps`` instructions ran.

        Returns:
            Number of instructions executed.
        """
        progress_bar = build_progress_bar(max_steps) if progress else None
        steps = 0
        try:
            while max_steps is None or steps < max_steps:
                if not self.step():
                    break
                steps += 1
                if progress_bar is not None:
                    progress_bar.update(1)
        finally:
            if progress_bar is not None:
                progress_bar.close()
        return steps

    def update_timers(self):
        """Apply every whole 60 Hz tick elapsed since the last one."""
        now = self._clock()
        ticks = int((now - self._last_timer_tick) * TIMER_FREQUENCY)
        if ticks <= 0:
            return
        beeps = min(ticks, int(self.state.sound_timer))
        self.state = tick_timers(self.state, ticks)
        self._last_timer_tick += ticks * TIMER_PERIOD
        for _ in range(beeps):
            self.beep_count += 1
            if self.on_beep is not None:
                self.on_beep()

    def _pace(self):
        delay = self.config.instruction_delay
        if delay:
            elapsed = self._clock() - self._last_instruction_time
            if elapsed < delay:
                self._sleep(delay - elapsed)
        self._last_instruction_time = self._clock()

    # Keypad

    def set_key(self, key: int, pressed: bool = True):
        """Press or release hex key ``key``."""
        if not 0 <= key < NUM_KEYS:
            raise ValueError(f"Key must be in 0x0..0xF, got {key}")
        self.state = self.state.replace(keypad=self.state.keypad.at[key].set(bool(pressed)))

    def set_keys(self, pressed: Iterable[bool]):
        """Replace the whole keypad with 16 pressed flags."""
        keys = [bool(p) for p in pressed]
        if len(keys) != NUM_KEYS:
            raise ValueError(f"Expected {NUM_KEYS} key states, got {len(keys)}")
        self.state = self.state.replace(keypad=jnp.array(keys, dtype=jnp.bool_))

    def release_all_keys(self):
        self.state = self.state.replace(keypad=jnp.zeros(NUM_KEYS, dtype=jnp.bool_))

    @property
    def keypad(self) -> np.ndarray:
        return self._read_only(self.state.keypad)

    # Observable state

    @property
    def display(self) -> np.ndarray:
        """Read-only copy of the display, indexed ``[x, y]``."""
        return self._read_only(self.state.display)

    def pixel(self, x: int, y: int) -> bool:
        return bool(self.state.display[x, y])

    @property
    def sound_active(self) -> bool:
        """True while the sound timer is non-zero."""
        return int(self.state.sound_timer) > 0

    @property
    def halted(self) -> bool:
        return not can_fetch(self.state)

    @property
    def program_counter(self) -> int:
        return int(self.state.pc)

    @property
    def index_register(self) -> int:
        return int(self.state.I)

    @property
    def registers(self) -> np.ndarray:
        return self._read_only(self.state.V)

    @property
    def delay_timer(self) -> int:
        return int(self.state.delay_timer)

    @property
    def sound_timer(self) -> int:
        return int(self.state.sound_timer)

    @property
    def stack_depth(self) -> int:
        return int(self.state.stack.pointer)

    @staticmethod
    def _read_only(array) -> np.ndarray:
        view = np.array(array)
        view.setflags(write=False)
        return view
