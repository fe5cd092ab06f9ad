"""Tests for the environment variable utility."""

import os

import pytest

from netconfig.utils.env import (
    EnvVarNotSetError,
    EnvVarTypeError,
    env_is_set,
    get_env,
    require_env,
)


def test_get_env_basic():
    """Test getting set variables and missing variables with defaults."""
    os.environ["NETCONFIG_TEST_VAR"] = "test_value"
    assert get_env("NETCONFIG_TEST_VAR") == "test_value"
    assert get_env("NETCONFIG_MISSING_VAR", default="default") == "default"
    assert get_env("NETCONFIG_MISSING_VAR") is None
    del os.environ["NETCONFIG_TEST_VAR"]


def test_get_env_coercion(monkeypatch):
    """Test type coercion for common types."""
    monkeypatch.setenv("NETCONFIG_BOOL_TRUE", "true")
    monkeypatch.setenv("NETCONFIG_BOOL_FALSE", "0")
    monkeypatch.setenv("NETCONFIG_INT", "123")
    monkeypatch.setenv("NETCONFIG_FLOAT", "0.5")
    monkeypatch.setenv("NETCONFIG_LIST", "vmware, hyper-v, tap ")

    assert get_env("NETCONFIG_BOOL_TRUE", as_type=bool) is True
    assert get_env("NETCONFIG_BOOL_FALSE", as_type=bool) is False
    assert get_env("NETCONFIG_INT", as_type=int) == 123
    assert get_env("NETCONFIG_FLOAT", as_type=float) == 0.5
    assert get_env("NETCONFIG_LIST", as_type=list) == ["vmware", "hyper-v", "tap"]

    # Test coercion failure
    monkeypatch.setenv("NETCONFIG_INVALID_INT", "not_an_int")
    with pytest.raises(EnvVarTypeError):
        get_env("NETCONFIG_INVALID_INT", as_type=int)


def test_get_env_strict_bool(monkeypatch):
    """Test a misspelled boolean is rejected instead of read as False."""
    monkeypatch.setenv("HOTSPOT_AUTO_RECOVERY", "ture")
    with pytest.raises(EnvVarTypeError):
        get_env("HOTSPOT_AUTO_RECOVERY", default=True, as_type=bool)


def test_require_env():
    """Test getting required variables."""
    os.environ["NETCONFIG_REQUIRED"] = "exists"
    assert require_env("NETCONFIG_REQUIRED") == "exists"

    with pytest.raises(EnvVarNotSetError):
        require_env("NETCONFIG_NON_EXISTENT")

    del os.environ["NETCONFIG_REQUIRED"]


def test_env_is_set(monkeypatch):
    """Test empty values count as unset."""
    monkeypatch.setenv("NETCONFIG_EMPTY", "")
    monkeypatch.setenv("NETCONFIG_FULL", "x")
    monkeypatch.delenv("NETCONFIG_ABSENT", raising=False)

    assert env_is_set("NETCONFIG_FULL") is True
    assert env_is_set("NETCONFIG_EMPTY") is False
    assert env_is_set("NETCONFIG_ABSENT") is False
