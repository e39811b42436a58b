"""Errors raised by the CHIP-8 machine."""


class Chip8Error(Exception):
    """Base class for all machine errors."""


class ConfigurationError(Chip8Error, ValueError):
    """Invalid machine configuration."""


class ProgramTooLargeError(Chip8Error):
    """Program does not fit between the program start and the end of memory."""

    def __init__(self, size: int, capacity: int):
        self.size = size
        self.capacity = capacity
        super().__init__(
            f"Program of {size} bytes could not fit into the {capacity} bytes of program memory"
        )


class ProgramIOError(Chip8Error):
    """Reading a program from its byte source failed."""

    def __init__(self, path, error: OSError):
        self.path = path
        self.error = error
        super().__init__(f"Could not read program '{path}': {error}")


class StackError(Chip8Error):
    """Call stack fault."""


class StackOverflowError(StackError):
    """CALL with a full call stack."""


class StackUnderflowError(StackError):
    """RET with an empty call stack."""
