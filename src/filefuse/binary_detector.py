"""Binary content detection utilities."""

from typing import Optional

# Number of leading bytes inspected for control characters.
SAMPLE_SIZE = 1024

# Percentage of suspicious control bytes above which content counts as binary.
SUSPICIOUS_PERCENT_LIMIT = 10


def _is_suspicious(byte: int) -> bool:
    # C0 control characters except tab, line feed, form feed and carriage return
    return 0x01 <= byte <= 0x08 or byte == 0x0B or 0x0E <= byte <= 0x1F


def is_binary_content(data: bytes, sample_size: int = SAMPLE_SIZE) -> bool:
    """Detect binary content from its leading bytes.

    Content is binary when the sample holds a NUL byte, or when more than 10% of the
    sampled bytes are control characters that never appear in ordinary text.

    Args:
        data: The file content (only the first ``sample_size`` bytes are inspected).
        sample_size: Number of bytes to inspect.

    Returns:
        True if the content appears to be binary. Empty content is text.

    Example:
        >>> is_binary_content(b"print('hello')\\n")
        False
        >>> is_binary_content(b"PK\\x03\\x04\\x00\\x00")
        True
        >>> is_binary_content(b"")
        False
    """
    sample = data[:sample_size]
    if not sample:
        return False
    if b"\0" in sample:
        return True
    suspicious = sum(1 for byte in sample if _is_suspicious(byte))
    return suspicious * 100 // len(sample) > SUSPICIOUS_PERCENT_LIMIT


def decode_text(data: bytes) -> Optional[str]:
    """Decode content as UTF-8, or return None when it is binary or not valid UTF-8.

    Example:
        >>> decode_text("naïve".encode("utf-8"))
        'naïve'
        >>> decode_text(b"\\xff\\xfe\\xfa") is None
        True
    """
    if is_binary_content(data):
        return None
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return None
