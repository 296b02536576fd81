"""Utility modules."""

from stackfs.utils.units import human_size, parse_size
from stackfs.utils.validation import validate_name

__all__ = ["human_size", "parse_size", "validate_name"]
