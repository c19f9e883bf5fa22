"""Human-friendly formatting helpers for the dashboard."""

from datetime import datetime


def format_size(size_bytes: int) -> str:
    """1023 -> '1023 B', 1536 -> '1.5 KB', 5 MiB -> '5.0 MB'."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    if size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    return f"{size_bytes / (1024 * 1024):.1f} MB"


def format_time(value: datetime) -> str:
    """Local wall-clock time."""
    return value.astimezone().strftime("%Y-%m-%d %H:%M:%S")


def display_name(pathname: str) -> str:
    """Last path segment of a stored pathname."""
    return pathname.rsplit("/", 1)[-1]
