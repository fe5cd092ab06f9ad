"""Normalization of command output to text.

Windows console tools running under a Chinese locale write GBK instead of
UTF-8. Everything that reads tool output goes through normalize_text()
before any label matching happens.
"""

from netconfig.exceptions import DecodeError

LEGACY_ENCODING = "gbk"


def normalize_text(data: bytes) -> str:
    """Decode tool output as UTF-8, falling back to GBK.

    Args:
        data: Raw bytes as captured from a subprocess.

    Returns:
        Decoded text. Valid UTF-8 input is returned unchanged.

    Raises:
        DecodeError: If the bytes are neither valid UTF-8 nor valid GBK.
    """
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        pass

    try:
        return data.decode(LEGACY_ENCODING)
    except UnicodeDecodeError as e:
        raise DecodeError(
            f"Output is neither UTF-8 nor {LEGACY_ENCODING.upper()} "
            f"({len(data)} bytes)"
        ) from e


def safe_preview(text: str, length: int = 100) -> str:
    """Return at most the first length characters of text, for log lines."""
    if length <= 0:
        return ""
    return text[:length]
