"""
Shared formatting utilities.
"""


def format_size(size_bytes: int) -> str:
    """Format bytes as human readable string."""
    for unit in ["B", "KB", "MB", "GB", "TB"]:
        if size_bytes < 1024:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024
    return f"{size_bytes:.1f} PB"


def format_count(count: int, noun: str) -> str:
    """Format a count with a naively pluralised noun ("1 item", "3 items")."""
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def truncate(text: str, max_len: int) -> str:
    """Cut text to max_len characters, marking the cut with '...'."""
    if max_len <= 3 or len(text) <= max_len:
        return text[:max(max_len, 0)]
    return text[:max_len - 3] + "..."
