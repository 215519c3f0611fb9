"""Lexing, variable expansion, here-documents and command parsing for a small shell."""

__version__ = "0.1.0"