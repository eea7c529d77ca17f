"""UI utilities for the CLI."""

import atexit
import os

from ruuvi_decoders.models import DataFormat

# ANSI escape codes
DIM = "\033[2m"
RESET = "\033[0m"
ALT_SCREEN_ON = "\033[?1049h"
ALT_SCREEN_OFF = "\033[?1049l"
CURSOR_HOME = "\033[H"
CLEAR_SCREEN = "\033[J"
SHOW_CURSOR = "\033[?25h"

_in_fullscreen = False


def enter_fullscreen():
    """Switch to alternate screen buffer and clear."""
    global _in_fullscreen
    print(ALT_SCREEN_ON, end="", flush=True)
    print(CURSOR_HOME + CLEAR_SCREEN, end="", flush=True)
    _in_fullscreen = True
    atexit.register(exit_fullscreen)


def exit_fullscreen():
    """Restore main screen buffer."""
    global _in_fullscreen
    if _in_fullscreen:
        print(SHOW_CURSOR + ALT_SCREEN_OFF, end="", flush=True)
        _in_fullscreen = False


def terminal_width(default: int = 80) -> int:
    try:
        return os.get_terminal_size().columns
    except OSError:
        return default


def separator_line() -> str:
    """Return a dim grey horizontal line spanning terminal width."""
    return f"{DIM}{'─' * terminal_width()}{RESET}"


def format_hex(data: bytes, group: int = 1) -> str:
    """Upper-case hex with a space between every `group` bytes.

    Long AD structures stay readable when wrapped by the terminal.
    """
    text = data.hex().upper()
    step = group * 2
    return " ".join(text[i : i + step] for i in range(0, len(text), step))


def supported_formats_line() -> str:
    """One-line summary of the decodable data formats."""
    return ", ".join(f"{fmt.name} ({fmt.payload_length} bytes)" for fmt in DataFormat)


def draw_header():
    """Draw the application header at the top of the screen."""
    print(CURSOR_HOME + CLEAR_SCREEN, end="", flush=True)
    print("Ruuvi Decoders")
    print(f"{DIM}Formats: {supported_formats_line()}{RESET}")
    print(f"{DIM}Paste advertisement hex after 'decode', exit to quit{RESET}")
    print()
