import re
import time
from pathlib import Path

IMAGE_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".svg": "image/svg",
}

TEXT_TYPES = {
    ".txt": "text/plain",
    ".md": "text/markdown",
    ".csv": "text/csv",
    ".json": "application/json",
}

DEFAULT_MIME = "application/octet-stream"

def parse_file_size(size_str: str) -> int:
    """Parse file size string with units (B, KB, MB, GB) to bytes.

    Examples:
        "10" -> 10 bytes
        "10mb" or "10MB" -> 10485760 bytes
        "500kb" or "500KB" -> 512000 bytes
    """
    size_str = str(size_str).strip()

    if size_str.isdigit():
        return int(size_str)

    match = re.match(r'^(\d+(?:\.\d+)?)\s*(b|kb|mb|gb)$', size_str, re.IGNORECASE)
    if not match:
        raise ValueError(f"Invalid file size format: {size_str}")

    value = float(match.group(1))
    unit = match.group(2).lower()

    multipliers = {
        'b': 1,
        'kb': 1024 ** 1,
        'mb': 1024 ** 2,
        'gb': 1024 ** 3
    }

    return int(value * multipliers[unit])

def parse_time(time_str: str) -> int:
    """Parse time string with units (s, m, h) to seconds.

    Examples:
        "60" -> 60 seconds
        "30s" -> 30 seconds
        "5m" or "5M" -> 300 seconds
        "1h" -> 3600 seconds
    """
    time_str = str(time_str).strip()

    if time_str.isdigit():
        return int(time_str)

    match = re.match(r'^(\d+(?:\.\d+)?)\s*(s|m|h)$', time_str, re.IGNORECASE)
    if not match:
        raise ValueError(f"Invalid time format: {time_str}")

    value = float(match.group(1))
    unit = match.group(2).lower()

    multipliers = {
        's': 1,
        'm': 60,
        'h': 3600
    }

    return int(value * multipliers[unit])

def classify(filename: str) -> tuple[str, str]:
    """Return ``(category, mime)`` for a filename based on its extension.

    Category is one of ``image``, ``text`` or ``other``.
    """
    ext = Path(filename).suffix.lower()
    if ext in IMAGE_TYPES:
        return "image", IMAGE_TYPES[ext]
    if ext in TEXT_TYPES:
        return "text", TEXT_TYPES[ext]
    return "other", DEFAULT_MIME

def safe_name(filename: str | None) -> str | None:
    """Strip any directory components. Returns None for unusable names."""
    if not filename:
        return None
    name = Path(filename.replace("\\", "/")).name
    if not name or name in ('.', '..'):
        return None
    return name

def timestamped_name(filename: str) -> str:
    """Prefix a filename with the current time in milliseconds."""
    return f"{int(time.time() * 1000)}-{filename}"
