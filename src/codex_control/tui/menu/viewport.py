"""Pure scrolling arithmetic for the entry list.

The list window is derived from terminal height: everything that is not a
row (title, help lines, status, borders) takes CHROME_ROWS lines.
"""

DEFAULT_WINDOW = 20
MIN_WINDOW = 6
CHROME_ROWS = 10


def window_size(height: int) -> int:
    """Rows available for entries at the given terminal height."""
    if height <= 0:
        return DEFAULT_WINDOW
    return max(MIN_WINDOW, height - CHROME_ROWS)


def clamp_cursor(value: int, size: int) -> int:
    if size <= 0:
        return 0
    return max(0, min(value, size - 1))


def ensure_visible(cursor: int, offset: int, total: int, window: int) -> tuple[int, int]:
    """Return (cursor, offset) with the cursor clamped and inside the window.

    The offset never exceeds max(0, total - window), so the last page is
    always full when there are enough entries.
    """
    if total <= 0:
        return 0, 0
    cursor = clamp_cursor(cursor, total)
    visible = min(window if window > 0 else total, total)
    max_offset = max(0, total - visible)
    offset = max(0, min(offset, max_offset))
    if cursor < offset:
        offset = cursor
    elif cursor >= offset + visible:
        offset = cursor - visible + 1
    return cursor, offset


def visible_slice(offset: int, total: int, window: int) -> range:
    """Indices of the entries rendered for this offset."""
    if total <= 0:
        return range(0)
    visible = min(window if window > 0 else total, total)
    start = max(0, min(offset, total - visible))
    return range(start, start + visible)
