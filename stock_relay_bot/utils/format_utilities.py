"""
Number formatting helpers shared by replies and embeds.
"""


def format_price(value: float) -> str:
    """
    Format a price with at least two decimals and no lost precision.
    
    150 -> "150.00", 150.004 -> "150.004", 0.0015 -> "0.0015"
    """
    text = f"{value:.8f}".rstrip("0")
    whole, _, fraction = text.partition(".")
    return f"{whole}.{fraction.ljust(2, '0')}"
