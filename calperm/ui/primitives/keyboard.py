"""
Keyboard input handling.

Raw single-key reads with arrow-key decoding, plus the KeyReader
abstraction the menus and prompts read from. TerminalKeyReader talks to the
real terminal; ScriptedKeyReader replays a fixed sequence (tests, demos).
"""

import os
import sys
import time
from contextlib import contextmanager

from ...core.errors import CancelInput

# Platform-specific imports
if os.name == 'nt':
    import msvcrt
else:
    import termios
    import tty


# Special key constants
KEY_UP = "KEY_UP"
KEY_DOWN = "KEY_DOWN"
KEY_LEFT = "KEY_LEFT"
KEY_RIGHT = "KEY_RIGHT"
KEY_ENTER = "KEY_ENTER"
KEY_ESC = "KEY_ESC"
KEY_BACKSPACE = "KEY_BACKSPACE"
KEY_TAB = "KEY_TAB"
KEY_SPACE = "KEY_SPACE"

# ESC-prefixed sequences (after the ESC byte)
UNIX_ESCAPE_CODES = {
    '[A': KEY_UP,
    '[B': KEY_DOWN,
    '[C': KEY_RIGHT,
    '[D': KEY_LEFT,
    'OA': KEY_UP,
    'OB': KEY_DOWN,
    'OC': KEY_RIGHT,
    'OD': KEY_LEFT,
}

# Second byte after a 0xe0 / 0x00 prefix
WINDOWS_KEY_CODES = {
    b'H': KEY_UP,
    b'P': KEY_DOWN,
    b'K': KEY_LEFT,
    b'M': KEY_RIGHT,
}

# Raw character -> (KEY_* constant, character to return in plain mode)
UNIX_SPECIAL_CHARS = {
    '\r': (KEY_ENTER, '\r'),
    '\n': (KEY_ENTER, '\n'),
    '\x7f': (KEY_BACKSPACE, '\x7f'),
    '\x08': (KEY_BACKSPACE, '\x08'),
    '\t': (KEY_TAB, '\t'),
    ' ': (KEY_SPACE, ' '),
}

WINDOWS_SPECIAL_CHARS = {
    b'\r': (KEY_ENTER, '\r'),
    b'\x08': (KEY_BACKSPACE, '\x08'),
    b'\t': (KEY_TAB, '\t'),
    b' ': (KEY_SPACE, ' '),
}


@contextmanager
def raw_terminal():
    """Context manager for raw terminal mode (Unix only, no-op on Windows)."""
    if os.name == 'nt':
        yield None
    else:
        fd = sys.stdin.fileno()
        old_settings = termios.tcgetattr(fd)
        try:
            tty.setraw(fd)
            yield fd
        finally:
            termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)


def read_escape_sequence(fd) -> str:
    """Read whatever follows an ESC byte without blocking."""
    import fcntl

    flags = fcntl.fcntl(fd, fcntl.F_GETFL)
    fcntl.fcntl(fd, fcntl.F_SETFL, flags | os.O_NONBLOCK)
    try:
        # Small delay to let escape sequence arrive
        time.sleep(0.02)
        try:
            return sys.stdin.read(10) or ''
        except (IOError, BlockingIOError, TypeError):
            return ''
    finally:
        fcntl.fcntl(fd, fcntl.F_SETFL, flags)


def getch(return_special_keys: bool = False) -> str:
    """
    Read a single character from stdin without echo.

    Args:
        return_special_keys: If True, return KEY_* constants for arrow keys etc.
                            If False, return '' for arrow keys

    Returns the character, or special strings:
    - KEY_ESC for standalone ESC
    - KEY_UP/DOWN/LEFT/RIGHT for arrow keys (if return_special_keys=True)
    - KEY_ENTER for Enter
    - '' for ignored escape sequences
    """
    if os.name == 'nt':
        ch = msvcrt.getch()
        # Windows arrow keys send two bytes: 0xe0 followed by key code
        if ch in (b'\xe0', b'\x00'):
            key_code = msvcrt.getch()
            if return_special_keys:
                return WINDOWS_KEY_CODES.get(key_code, '')
            return ''
        if ch == b'\x1b':
            return KEY_ESC if return_special_keys else '\x1b'
        if ch in WINDOWS_SPECIAL_CHARS:
            special, plain = WINDOWS_SPECIAL_CHARS[ch]
            return special if return_special_keys else plain
        return ch.decode('utf-8', errors='ignore')

    with raw_terminal() as fd:
        ch = sys.stdin.read(1)

        if ch in UNIX_SPECIAL_CHARS:
            special, plain = UNIX_SPECIAL_CHARS[ch]
            return special if return_special_keys else plain

        if ch == '\x03':
            raise KeyboardInterrupt

        if ch == '\x1b':
            extra = read_escape_sequence(fd)
            if not extra:
                return KEY_ESC if return_special_keys else '\x1b'
            if return_special_keys:
                return UNIX_ESCAPE_CODES.get(extra[:2], '')
            return ''

        return ch


class KeyReader:
    """Source of key presses and typed lines for the UI."""

    def read_key(self) -> str:
        """Block for one key; returns a KEY_* constant or a character."""
        raise NotImplementedError

    def read_line(self, echo=None) -> str:
        """
        Block for one line of typed input.

        Args:
            echo: Callable that receives text to show as the user types

        Raises:
            CancelInput: If ESC is pressed
        """
        raise NotImplementedError


class TerminalKeyReader(KeyReader):
    """Reads from the real terminal."""

    def read_key(self) -> str:
        while True:
            key = getch(return_special_keys=True)
            if key:  # Empty means an ignored escape sequence
                return key

    def read_line(self, echo=None) -> str:
        echo = echo or (lambda text: print(text, end='', flush=True))
        result = []

        while True:
            ch = getch()

            if not ch:  # Empty (ignored key like arrow)
                continue
            elif ch == '\x1b':  # ESC
                echo('\n')
                raise CancelInput()
            elif ch in ('\r', '\n'):  # Enter
                echo('\n')
                return ''.join(result)
            elif ch in ('\x7f', '\x08'):  # Backspace
                if result:
                    result.pop()
                    # Move cursor back, overwrite with space, move back again
                    echo('\b \b')
            elif ch >= ' ':  # Printable character
                result.append(ch)
                echo(ch)


class ScriptedKeyReader(KeyReader):
    """
    Replays a fixed script of inputs.

    Each entry is either a KEY_* constant / single character (consumed by
    read_key) or a string line (consumed by read_line). KEY_ESC consumed by
    read_line cancels, like a real ESC press.
    """

    def __init__(self, script):
        self._script = list(script)
        self.consumed = []

    @property
    def remaining(self) -> list:
        return list(self._script)

    def _next(self):
        if not self._script:
            raise EOFError("Key script exhausted")
        item = self._script.pop(0)
        self.consumed.append(item)
        return item

    def read_key(self) -> str:
        return self._next()

    def read_line(self, echo=None) -> str:
        item = self._next()
        if item == KEY_ESC:
            raise CancelInput()
        if echo:
            echo(item + '\n')
        return item
