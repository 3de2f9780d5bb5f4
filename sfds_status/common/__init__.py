"""Shared constants, errors, configuration and logging for sfds-status."""
