"""
Helpers that turn byte counts and run times into short strings for the
summary panel.
"""

_UNITS = ("B", "KB", "MB", "GB")


def format_size(num_bytes: int) -> str:
    """Formats a byte count, e.g. '512 B' or '1.4 MB'."""
    size = float(max(num_bytes, 0))
    for unit in _UNITS[:-1]:
        if size < 1024:
            break
        size /= 1024
    else:
        unit = _UNITS[-1]
    if unit == "B":
        return f"{int(size)} B"
    return f"{size:.1f} {unit}"


def format_duration(seconds: float) -> str:
    """Formats a run time or timeout: '0.4s', '42s' or '3m 05s'."""
    if seconds < 10:
        return f"{seconds:.1f}s"
    minutes, secs = divmod(int(round(seconds)), 60)
    if not minutes:
        return f"{secs}s"
    return f"{minutes}m {secs:02d}s"
