"""Utility modules for galamint."""

from galamint.utils.numbers import format_big_number

__all__ = ["format_big_number"]
