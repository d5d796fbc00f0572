"""Terminal Output Formatting Package"""

import os
import sys


class Colors:
    """ANSI escape codes for terminal colors."""
    RESET = '\033[0m'
    BOLD = '\033[1m'
    DIM = '\033[2m'
    RED = '\033[31m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    BLUE = '\033[34m'
    CYAN = '\033[36m'
    GRAY = '\033[90m'


def _supports_color() -> bool:
    if os.environ.get('NO_COLOR'):
        return False
    if os.environ.get('FORCE_COLOR'):
        return True
    if not hasattr(sys.stdout, 'isatty') or not sys.stdout.isatty():
        return False
    if sys.platform == 'win32':
        try:
            import ctypes
            kernel32 = ctypes.windll.kernel32
            kernel32.SetConsoleMode(kernel32.GetStdHandle(-11), 7)
            return True
        except (AttributeError, OSError):
            return False
    return True


def _supports_unicode() -> bool:
    if sys.platform == 'win32':
        try:
            '✓'.encode(sys.stdout.encoding or 'utf-8')
            return True
        except (UnicodeEncodeError, LookupError):
            return False
    return True


COLORS_ENABLED = _supports_color()
UNICODE_ENABLED = _supports_unicode()

CHECK = '✓' if UNICODE_ENABLED else '[OK]'
CROSS = '✗' if UNICODE_ENABLED else '[X]'
WARN = '⚠' if UNICODE_ENABLED else '[!]'

SPINNER_FRAMES = (
    ['⠋', '⠙', '⠹', '⠸', '⠼', '⠴', '⠦', '⠧', '⠇', '⠏']
    if UNICODE_ENABLED else ['-', '\\', '|', '/']
)


def colorize(text: str, *codes: str) -> str:
    if not COLORS_ENABLED or not codes:
        return text
    return f"{''.join(codes)}{text}{Colors.RESET}"


def success(text: str) -> str:
    return colorize(text, Colors.GREEN)


def error(text: str) -> str:
    return colorize(text, Colors.RED)


def warning(text: str) -> str:
    return colorize(text, Colors.YELLOW)


def info(text: str) -> str:
    return colorize(text, Colors.CYAN)


def dim(text: str) -> str:
    return colorize(text, Colors.DIM)


def bold(text: str) -> str:
    return colorize(text, Colors.BOLD)


def print_success(message: str) -> None:
    print(f"{success(CHECK)} {message}")


def print_error(message: str) -> None:
    print(f"{error(CROSS)} {error(message)}", file=sys.stderr)


def print_warning(message: str) -> None:
    # stderr keeps stdout clean for --message-only pipes
    print(f"{warning(WARN)} {warning(message)}", file=sys.stderr)


__all__ = [
    "Colors", "COLORS_ENABLED", "UNICODE_ENABLED",
    "CHECK", "CROSS", "WARN", "SPINNER_FRAMES",
    "colorize", "success", "error", "warning", "info", "dim", "bold",
    "print_success", "print_error", "print_warning",
]
