"""Backends for interface discovery, configuration and hotspot control."""

from netconfig.backends.network import NetworkEngine

__all__ = ["NetworkEngine"]
