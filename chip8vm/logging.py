"""Console logging utilities for the CHIP-8 machine.

A small levelled console logger plus a machine-specific logger with one
method per event the step loop reports, and a tqdm progress bar for long runs.
"""

import sys
import time
from typing import Optional

from tqdm import tqdm


class ConsoleLogger:
    """Flexible console logger with levels, colors and elapsed-time stamps."""

    def __init__(
        self,
        name: str = "chip8vm",
        log_level: str = "INFO",
        use_colors: bool = True,
        show_timestamps: bool = True,
        stream=None,
    ):
        self.name = name
        self.log_level = log_level.upper()
        self.stream = stream if stream is not None else sys.stdout
        self.use_colors = (
            use_colors and hasattr(self.stream, "isatty") and self.stream.isatty()
        )
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

        self.colors = (
            {
                "DEBUG": "\033[36m",
                "INFO": "\033[32m",
                "WARNING": "\033[33m",
                "ERROR": "\033[31m",
                "CRITICAL": "\033[35m",
                "RESET": "\033[0m"
            }
            if self.use_colors
            else {
                k: ""
                for k in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL", "RESET"]
            }
        )

        self.level_order = {
            "DEBUG": 0,
            "INFO": 1,
            "WARNING": 2,
            "ERROR": 3,
            "CRITICAL": 4,
        }

    def _should_log(self, level: str) -> bool:
        """Check if message should be logged based on current log level."""
        return self.level_order.get(level.upper(), 1) >= self.level_order.get(
            self.log_level, 1
        )

    def _format_message(self, level: str, message: str) -> str:
        """Format log message with timestamp, level, and colors."""
        timestamp = (
            f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        )
        level_str = f"[{level:>8s}]"
        name_str = f"[{self.name}]"

        if self.use_colors:
            color = self.colors.get(level.upper(), "")
            reset = self.colors["RESET"]
            level_str = f"{color}{level_str}{reset}"

        return f"{timestamp}{level_str}{name_str} {message}"

    def log(self, level: str, message: str):
        """Log a message at the specified level."""
        if self._should_log(level):
            formatted = self._format_message(level, message)
            print(formatted, file=self.stream, flush=True)

    def debug(self, message: str):
        self.log("DEBUG", message)

    def info(self, message: str):
        self.log("INFO", message)

    def warning(self, message: str):
        self.log("WARNING", message)

    def error(self, message: str):
        self.log("ERROR", message)

    def critical(self, message: str):
        self.log("CRITICAL", message)


class MachineLogger(ConsoleLogger):
    """Logger for the machine step loop."""

    def __init__(self, name: str = "chip8vm", log_level: str = "WARNING", **kwargs):
        super().__init__(name, log_level=log_level, **kwargs)

    def log_program_loaded(self, size: int, start: int, capacity: int):
        self.info(f"Loaded {size} byte program at 0x{start:03X} ({capacity - size} bytes free)")

    def log_unknown_instruction(self, instruction: int, address: int):
        self.warning(f"Unknown instruction 0x{instruction:04X} at 0x{address:03X}, skipped")

    def log_stack_fault(self, error: Exception, address: int):
        self.error(f"Stack fault at 0x{address:03X}: {error}")

    def log_halt(self, pc: int, memory_size: int, steps: int):
        self.debug(
            f"Halted after {steps} instructions: pc 0x{pc:04X} is past the end of "
            f"{memory_size} bytes of memory"
        )


def build_progress_bar(total: Optional[int], desc: str = "Running", **kwargs) -> tqdm:
    """Build a tqdm progress bar counting executed instructions."""
    return tqdm(total=total, desc=desc, unit="instr", **kwargs)
