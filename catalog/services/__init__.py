# catalog/services/__init__.py
"""Catalog services"""
from .category_service import CategoryService, CategoryCycleError
from .variant_service import VariantService

__all__ = [
    'CategoryService',
    'CategoryCycleError',
    'VariantService'
]
