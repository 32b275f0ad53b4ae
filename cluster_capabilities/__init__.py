"""Kubernetes capability derivation and sync for managed clusters."""

__version__ = "0.1.0"
