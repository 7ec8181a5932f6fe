"""Wortschatz Reader: click German words, get grammar notes in Russian."""

__version__ = "0.1.0"
