"""Common utility functions and defaults."""

import uuid
from typing import Final

# Connection defaults
DEFAULT_API_ADDRESS: Final = "127.0.0.1"
DEFAULT_API_PORT: Final = 10085
DEFAULT_CONNECT_TIMEOUT: Final = 5.0  # Seconds

# Size constants
BYTES_PER_KB: Final = 1024
BYTES_PER_MB: Final = BYTES_PER_KB * 1024
BYTES_PER_GB: Final = BYTES_PER_MB * 1024
BYTES_PER_TB: Final = BYTES_PER_GB * 1024

# Size units
SIZE_UNITS: Final = [
    ("B", 1),
    ("KB", BYTES_PER_KB),
    ("MB", BYTES_PER_MB),
    ("GB", BYTES_PER_GB),
    ("TB", BYTES_PER_TB),
]


def format_bytes(bytes_: float) -> str:
    """Format bytes into human readable format.

    Args:
        bytes_: Number of bytes to format

    Returns:
        str: Formatted string with appropriate unit
    """
    for unit, divisor in SIZE_UNITS:
        if bytes_ < divisor * BYTES_PER_KB:
            return f"{bytes_ / divisor:.1f} {unit}"
    return f"{bytes_ / BYTES_PER_TB:.1f} TB"


def generate_uuid() -> str:
    """Create a random UUID in its canonical string form."""
    return str(uuid.uuid4())


def format_target(address: str, port: int) -> str:
    """Build a gRPC target string, bracketing bare IPv6 addresses."""
    if ":" in address and not address.startswith("["):
        return f"[{address}]:{port}"
    return f"{address}:{port}"
