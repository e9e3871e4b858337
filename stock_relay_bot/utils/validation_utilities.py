"""
Utilities for validating command parameters across the bot.
Validators return ``(is_valid, error_message)`` tuples.
"""

import math
import re
from typing import Tuple

# Letters, digits and the separators exchanges use (BRK.B, TSCO.LON, ^GSPC)
SYMBOL_PATTERN = re.compile(r"^\^?[A-Z0-9][A-Z0-9.\-=]{0,14}$")


class ValidationError(Exception):
    """Exception raised when command validation fails."""
    pass


def validate_positive_number(value: str, min_value: float = 0) -> Tuple[bool, str]:
    """
    Validate that a string can be converted to a positive, finite number.
    
    Args:
        value: String to validate
        min_value: Value the number must be greater than (default: 0)
        
    Returns:
        Tuple of (is_valid, error_message)
    """
    try:
        num = float(value)
    except (TypeError, ValueError):
        return False, "Invalid number format."
    if not math.isfinite(num):
        return False, "Invalid number format."
    if num <= min_value:
        return False, f"Value must be greater than {min_value}."
    return True, ""


def validate_symbol(value: str) -> Tuple[bool, str]:
    """
    Validate a stock ticker symbol.
    
    Args:
        value: Symbol to validate, already uppercased
        
    Returns:
        Tuple of (is_valid, error_message)
    """
    if value and SYMBOL_PATTERN.match(value):
        return True, ""
    return False, f"`{value}` doesn't look like a ticker symbol (e.g., AAPL)."


def validate_choice(value: str, choices: list) -> Tuple[bool, str]:
    """
    Validate that a value is one of the allowed choices.
    
    Args:
        value: Value to validate
        choices: List of allowed choices
        
    Returns:
        Tuple of (is_valid, error_message)
    """
    if value in choices:
        return True, ""
    return False, f"Invalid choice. Please enter one of: {', '.join(choices)}."
