# catalog/models/attribute.py
from typing import Optional, List
from .base import TimeStampedModel

class AttributeValue(TimeStampedModel):
    """One discrete value of an attribute, e.g. Red"""
    id: str
    value: str
    attribute_id: Optional[str] = None
    display_order: Optional[int] = None

class Attribute(TimeStampedModel):
    """Named axis of product variation, e.g. Color"""
    id: str
    name: str
    values: List[AttributeValue] = []
    display_order: Optional[int] = None
