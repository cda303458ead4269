"""Catalog entities used by checkout and the inventory ledger."""
from dataclasses import dataclass
from typing import Optional

from ..value_objects import Money


@dataclass
class Product:
    id: str
    name: str
    price: Money
    category: Optional[str] = None
    is_active: bool = True
    stock_quantity: int = 0


@dataclass(frozen=True)
class SizeStock:
    product_id: str
    size: str
    quantity: int
