"""Recruitment API - candidate and job offer management backend."""

__version__ = "1.0.0"
