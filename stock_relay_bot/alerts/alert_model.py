"""
Data models for stock price alerts.
Defines the structure of alerts and their trigger condition.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Any

from ..api.alpha_vantage import normalize_symbol
from ..utils.format_utilities import format_price
from ..utils.validation_utilities import validate_positive_number, validate_symbol


class Direction(str, Enum):
    """Which side of the threshold fires the alert"""
    ABOVE = ">"
    BELOW = "<"

    @property
    def label(self) -> str:
        return "above" if self is Direction.ABOVE else "below"


@dataclass(frozen=True)
class PriceAlert:
    """Data model for a price alert, unique per (owner_id, symbol)"""
    owner_id: str
    symbol: str
    price: float
    direction: Direction
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to the snapshot entry stored under owner and symbol"""
        return {"price": self.price, "condition": self.direction.value}
    
    @classmethod
    def from_dict(cls, owner_id: str, symbol: str, data: Dict[str, Any]) -> "PriceAlert":
        """
        Create from a snapshot entry.
        
        Raises:
            ValueError: If the symbol or price would not pass `!alert add` validation
            KeyError: If a field is missing
        """
        if symbol != normalize_symbol(symbol) or not validate_symbol(symbol)[0]:
            raise ValueError(f"invalid symbol {symbol!r}")
        
        price = data["price"]
        # JSON true/false load as bool, which float() would accept
        if isinstance(price, bool) or not isinstance(price, (int, float)):
            raise ValueError(f"price for {symbol} must be a number, got {price!r}")
        valid, error = validate_positive_number(price)
        if not valid:
            raise ValueError(f"price for {symbol}: {error}")
        
        return cls(
            owner_id=str(owner_id),
            symbol=symbol,
            price=float(price),
            direction=Direction(data["condition"]),
        )
    
    def check_triggered(self, current_price: float) -> bool:
        """Check if the alert fires at the current price, inclusive of the threshold"""
        if self.direction is Direction.ABOVE:
            return current_price >= self.price
        return current_price <= self.price
    
    def describe(self) -> str:
        return f"{self.symbol}: {self.direction.value} {format_price(self.price)}"
