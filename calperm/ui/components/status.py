"""
Status bar component.

One line summarising the operation in progress, read from the context's
OperationStateTracker on every draw.
"""

from ..primitives import Theme


def print_status_bar(ctx) -> bool:
    """Print the status bar. Returns False (and prints nothing) when idle."""
    items = ctx.state.status_items()
    if not items:
        return False

    parts = []
    for i, (label, value) in enumerate(items):
        if i:
            parts.append(("  •  ", Theme.MUTED))
        parts.append((f"{label}: ", Theme.MUTED))
        parts.append((value, Theme.VALUE))
    ctx.renderer.line(*parts, spaces=2)
    ctx.renderer.newline()
    return True
