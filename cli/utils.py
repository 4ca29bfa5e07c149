"""Formatting helpers for CLI output."""


def format_interval(milliseconds: int) -> str:
    """
    Format an interval in milliseconds with a readable seconds suffix.

    Args:
        milliseconds: Interval length

    Returns:
        Formatted string (e.g., "6000 ms (6.0 s)", "250 ms")
    """
    if milliseconds < 1000:
        return f"{milliseconds} ms"
    return f"{milliseconds} ms ({milliseconds / 1000:.1f} s)"


def format_permissions(perms: int) -> str:
    """
    Format permission bits as an ls-style string.

    Args:
        perms: Permission bits (e.g., 0o755)

    Returns:
        Formatted string (e.g., "rwxr-xr-x")
    """
    chars = []
    for shift in (6, 3, 0):
        bits = (perms >> shift) & 0o7
        chars.append('r' if bits & 0o4 else '-')
        chars.append('w' if bits & 0o2 else '-')
        chars.append('x' if bits & 0o1 else '-')
    return ''.join(chars)
