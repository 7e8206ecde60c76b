# catalog/models/category.py
from enum import Enum
from typing import Optional, List
from pydantic import ConfigDict
from .base import TimeStampedModel

class OrphanPolicy(str, Enum):
    """What to do with a category whose parent is not in the collection"""
    DROP = "drop"  # leave it out of the forest
    PROMOTE = "promote"  # treat it as a root

class Category(TimeStampedModel):
    """Flat category record as stored, parent referenced by id"""
    id: str
    name: str
    parent_id: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None

    # Fields we do not know about travel through untouched
    model_config = ConfigDict(from_attributes=True, extra="allow")

class CategoryNode(Category):
    """Category with its materialized children, built on demand"""
    children: List['CategoryNode'] = []
