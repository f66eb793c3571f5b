"""
Layout arithmetic for fixed-width terminal output.

Pure functions; none of them ever returns a negative amount.
"""


def pad(target: int, current: int) -> int:
    """Spaces needed to grow current up to target (0 if already there)."""
    return max(0, target - current)


def center_offset(terminal_width: int, content_length: int) -> int:
    """Left offset that centres content; 0 when it does not fit."""
    if content_length >= terminal_width:
        return 0
    return (terminal_width - content_length) // 2


def split_padding(target: int, current: int) -> tuple[int, int]:
    """Left/right padding that centres current within target."""
    total = pad(target, current)
    left = total // 2
    return left, total - left
