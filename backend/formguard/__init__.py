"""Formguard: one form ruleset, validated identically in the browser and on the server."""

__version__ = "1.0.0"
