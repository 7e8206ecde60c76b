# catalog/models/__init__.py
"""Catalog models"""
from .attribute import Attribute, AttributeValue
from .category import Category, CategoryNode, OrphanPolicy
from .product import Product, CatalogSnapshot
from .variant import VariantDescriptor, ProductVariant, VariantPlan, AttributePlan

__all__ = [
    'Attribute',
    'AttributeValue',
    'Category',
    'CategoryNode',
    'OrphanPolicy',
    'Product',
    'CatalogSnapshot',
    'VariantDescriptor',
    'ProductVariant',
    'VariantPlan',
    'AttributePlan'
]
