"""Gambit — chess rules engine and minimax opponent."""

__version__ = "0.1.0"
