# catalog/models/variant.py
from decimal import Decimal
from typing import Optional, List
from pydantic import BaseModel
from .base import TimeStampedModel

# Fields an operator edits on a variant; kept when a persisted variant is matched
EDITABLE_FIELDS = ("sku", "price", "sale_price", "stock", "size", "barcode", "image_url")

class VariantDescriptor(TimeStampedModel):
    """Candidate variant, either freshly generated or backed by a persisted one"""
    id: Optional[str] = None
    sku: str = ""
    attribute_values: List[str] = []
    price: Decimal = Decimal("0")
    sale_price: Optional[Decimal] = None
    stock: int = 0
    size: str = ""
    barcode: str = ""
    image_url: Optional[str] = None

    @property
    def is_new(self) -> bool:
        return self.id is None

    @property
    def value_set(self) -> frozenset:
        """Attribute values as an unordered set, the identity of a variant"""
        return frozenset(self.attribute_values)

class ProductVariant(VariantDescriptor):
    """Variant as persisted for a product"""
    id: str
    product_id: Optional[str] = None

class VariantPlan(BaseModel):
    """Outcome of comparing a variant set with the persisted one"""
    variants: List[VariantDescriptor] = []
    added: List[VariantDescriptor] = []
    updated: List[VariantDescriptor] = []
    removed: List[ProductVariant] = []

    @property
    def removed_ids(self) -> List[str]:
        return [variant.id for variant in self.removed]

class AttributePlan(BaseModel):
    """Product attribute links to add, keep and remove"""
    added: List[str] = []
    kept: List[str] = []
    removed: List[str] = []
