"""Shared types, errors, units and logging setup."""
