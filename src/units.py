"""Size and percentage formatting for scan results and progress displays."""

MB_PER_GB = 1024


def mb_to_gb(size_mb: float) -> float:
    return size_mb / MB_PER_GB


def format_size(size_mb: float) -> str:
    """Render a megabyte figure the way the results screen does.

    Below 1 GB the value stays in MB (no decimals for whole numbers),
    otherwise it is shown in GB with two decimals.
    """
    if size_mb < 0:
        raise ValueError(f"size must be >= 0, got {size_mb}")
    if size_mb >= MB_PER_GB:
        return f"{mb_to_gb(size_mb):.2f} GB"
    if float(size_mb).is_integer():
        return f"{int(size_mb)} MB"
    return f"{size_mb:.1f} MB"


def format_percent(ratio: float) -> str:
    """0.75 -> '75%'."""
    return f"{ratio * 100:.0f}%"
