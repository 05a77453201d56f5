"""Numeric helpers and logging setup."""
