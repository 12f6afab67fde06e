"""Seaward: chat assistant backend for projects, sessions and engine delegation."""

__version__ = "1.0.0"
