"""Simple status messages (no panels)."""


def success(ctx, message: str) -> None:
    """Print success message."""
    ctx.renderer.line(("✓ ", "Green"), (message, "Green"), spaces=2)


def error(ctx, message: str) -> None:
    """Print error message."""
    ctx.renderer.line(("✗ ", "Red"), (message, "Red"), spaces=2)


def warning(ctx, message: str) -> None:
    """Print warning message."""
    ctx.renderer.line(("⚠ ", "Yellow"), (message, "Yellow"), spaces=2)


def info(ctx, message: str) -> None:
    """Print info message."""
    ctx.renderer.line(("ℹ ", "Cyan"), (message, "Cyan"), spaces=2)


def status(ctx, message: str) -> None:
    """Print status message."""
    ctx.renderer.line((message, "DarkGray"), spaces=2)
