"""Tests for command output decoding."""

import pytest

from netconfig.exceptions import DecodeError
from netconfig.utils.encoding import normalize_text, safe_preview


def test_utf8_passes_through():
    """Test that valid UTF-8 is returned unchanged."""
    text = "Wireless LAN adapter Wi-Fi:\n   SSID : Café 网络"
    assert normalize_text(text.encode("utf-8")) == text


def test_gbk_fallback():
    """Test that GBK output from a Chinese console is decoded."""
    text = "   默认网关. . . . . . . . . . . . . : 192.168.1.1"
    data = text.encode("gbk")

    with pytest.raises(UnicodeDecodeError):
        data.decode("utf-8")
    assert normalize_text(data) == text


def test_undecodable_bytes():
    """Test that bytes valid in neither encoding raise DecodeError."""
    with pytest.raises(DecodeError) as exc_info:
        normalize_text(b"abc\x81")
    assert "4 bytes" in str(exc_info.value)


def test_safe_preview():
    """Test log previews are truncated and tolerate odd lengths."""
    assert safe_preview("x" * 500) == "x" * 100
    assert safe_preview("short", 3) == "sho"
    assert safe_preview("anything", 0) == ""
    assert safe_preview("", 10) == ""
