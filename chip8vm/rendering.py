"""Text dumps of the CHIP-8 display for debugging and golden tests."""

import numpy as np


def display_to_text(display, on: str = "#", off: str = ".") -> str:
    """Convert a boolean ``[x, y]`` display to one text line per row.

    Args:
        display: Boolean array of shape (width, height)
        on: Character for lit pixels
        off: Character for unlit pixels

    Returns:
        Rows joined by newlines, top row first
    """
    # (width, height) -> (height, width)
    pixels = np.asarray(display, dtype=np.bool_).T
    return "\n".join("".join(on if lit else off for lit in row) for row in pixels)


def text_to_display(text: str, on: str = "#") -> np.ndarray:
    """Inverse of :func:`display_to_text`, returning a ``[x, y]`` boolean array."""
    rows = text.strip("\n").splitlines()
    pixels = np.array([[char == on for char in row] for row in rows], dtype=np.bool_)
    return pixels.T
