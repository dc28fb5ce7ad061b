"""Hugoland: trivia-driven incremental RPG state core."""

__version__ = "0.3.0"
