"""Helpers for deploying and managing OpenStack services."""

__version__ = "0.1.0"