"""Tests for display text dumps."""

import numpy as np
from chip8vm import display_to_text
from chip8vm.rendering import text_to_display


def test_display_to_text_rows_are_y():
    display = np.zeros((8, 2), dtype=bool)
    display[1, 0] = True
    display[7, 1] = True

    assert display_to_text(display) == ".#......\n.......#"


def test_custom_characters():
    display = np.array([[True], [False]])

    assert display_to_text(display, on="█", off=" ") == "█ "


def test_text_round_trip():
    text = "#..\n.#."

    display = text_to_display(text)

    assert display.shape == (3, 2)
    assert display_to_text(display) == text
