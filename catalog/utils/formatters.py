# catalog/utils/formatters.py
import re
from decimal import Decimal
from typing import Iterable, Optional

_WHITESPACE = re.compile(r"\s+")

def format_price(amount: Optional[Decimal]) -> str:
    """Format a price for display"""
    if amount is None:
        return "-"
    return f"{amount:,.2f}"

def sku_part(text: str, separator: str = "-") -> str:
    """Make a name or attribute value usable inside a SKU"""
    return _WHITESPACE.sub(separator, text.strip())

def build_sku(product_name: str, values: Iterable[str], separator: str = "-") -> str:
    """SKU of a generated variant: product name followed by its attribute values"""
    parts = [sku_part(product_name, separator)]
    parts.extend(sku_part(value, separator) for value in values)
    return separator.join(part for part in parts if part)

def sequential_sku(position: int, prefix: str = "PROD") -> str:
    """Placeholder SKU for a manually added variant, e.g. PROD-003"""
    return f"{prefix}-{position:03d}"
