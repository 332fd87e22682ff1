"""
Utility functions for hex conversion, hashing and timestamp formatting.

These helpers define the canonical text forms that every Circular
Protocol client must produce identically, so their edge-case behavior
is fixed:

- string_to_hex emits UPPERCASE hex
- hex_to_string rejects odd-length input
- hex_fix repairs odd-length input by left-padding with "0"
"""
import re
import hashlib
from datetime import datetime, timezone
from typing import Optional, Union

_HEX_RE = re.compile(r"[0-9a-fA-F]*")
_TIMESTAMP_RE = re.compile(r"^(\d{4}):(\d{2}):(\d{2})-(\d{2}):(\d{2}):(\d{2})$")


def _strip_prefix(hex_str: str) -> str:
    if hex_str.startswith("0x") or hex_str.startswith("0X"):
        return hex_str[2:]
    return hex_str


def string_to_hex(s: Optional[str]) -> str:
    """
    Convert a string to uppercase hex of its UTF-8 bytes.

    Args:
        s: Text to encode

    Returns:
        Uppercase hex without separators or prefix, "" for empty input
    """
    if not s:
        return ""
    return s.encode("utf-8").hex().upper()


def hex_to_string(hex_str: Optional[str]) -> str:
    """
    Decode a hex string back to text.

    Accepts an optional 0x/0X prefix and either letter case.

    Args:
        hex_str: Hex-encoded UTF-8 bytes

    Returns:
        Decoded text, or "" if the input has odd length, contains
        non-hex characters or is not valid UTF-8
    """
    if not hex_str:
        return ""

    stripped = _strip_prefix(hex_str)
    if len(stripped) % 2 != 0:
        return ""
    if not _HEX_RE.fullmatch(stripped):
        return ""

    try:
        return bytes.fromhex(stripped).decode("utf-8")
    except (ValueError, UnicodeDecodeError):
        return ""


def hex_fix(hex_str: Optional[str]) -> str:
    """
    Normalize a hex string for hashing and signing.

    Removes a 0x/0X prefix, lowercases, and left-pads with a single "0"
    when the length is odd. Characters are not validated.

    Args:
        hex_str: Hex string with or without prefix

    Returns:
        Lowercase, unprefixed, even-length hex string
    """
    if not hex_str:
        return ""

    fixed = _strip_prefix(hex_str).lower()
    if len(fixed) % 2 != 0:
        fixed = "0" + fixed
    return fixed


def sha256_hex(data: Union[str, bytes]) -> str:
    """Lowercase hex SHA-256 of a string (UTF-8) or bytes."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return hashlib.sha256(data).hexdigest()


def pad_number(num: int) -> str:
    """Zero-pad single digits (0-9); other values are returned unchanged."""
    if 0 <= num < 10:
        return f"0{num}"
    return str(num)


def get_formatted_timestamp(now: Optional[datetime] = None) -> str:
    """
    Current UTC time in Circular Protocol format.

    The format is YYYY:MM:DD-HH:MM:SS. The date parts are separated by
    colons, not dashes. Validators reject any other punctuation.

    Args:
        now: Optional instant to format; naive values are taken as UTC

    Returns:
        Formatted timestamp string
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is not None:
        now = now.astimezone(timezone.utc)

    return (
        f"{now.year}:{pad_number(now.month)}:{pad_number(now.day)}"
        f"-{pad_number(now.hour)}:{pad_number(now.minute)}:{pad_number(now.second)}"
    )


def parse_formatted_timestamp(text: str) -> datetime:
    """
    Parse a YYYY:MM:DD-HH:MM:SS timestamp into an aware UTC datetime.

    Raises:
        ValueError: If the text does not match the protocol format
    """
    match = _TIMESTAMP_RE.match(text or "")
    if not match:
        raise ValueError(f"Invalid timestamp format: {text!r}")
    year, month, day, hour, minute, second = (int(part) for part in match.groups())
    return datetime(year, month, day, hour, minute, second, tzinfo=timezone.utc)
