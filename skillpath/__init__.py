"""Skillpath learning-roadmap backend."""

__version__ = "0.1.0"
