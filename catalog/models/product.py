# catalog/models/product.py
from typing import Optional, List
from pydantic import BaseModel
from .base import TimeStampedModel
from .attribute import Attribute
from .category import Category
from .variant import ProductVariant

class Product(TimeStampedModel):
    """Product as loaded for the edit flow"""
    id: Optional[str] = None
    name: str
    category_id: Optional[str] = None
    description: Optional[str] = None
    selected_attributes: List[str] = []

    # Persisted variants, empty for a product being created
    variants: List[ProductVariant] = []

class CatalogSnapshot(BaseModel):
    """Everything the fetch side hands over in one go"""
    categories: List[Category] = []
    attributes: List[Attribute] = []
    product: Optional[Product] = None
