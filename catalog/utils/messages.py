# catalog/utils/messages.py
from typing import Dict, Iterable, List, Optional
from ..models.category import CategoryNode
from ..models.variant import VariantDescriptor, VariantPlan
from ..services.category_service import CategoryService
from .formatters import format_price

class Messages:
    @staticmethod
    def format_category_tree(forest: Iterable[CategoryNode]) -> str:
        """Indented outline of a category forest"""
        lines = [
            f"{'  ' * depth}- {node.name}"
            for node, depth in CategoryService.walk_tree(forest)
        ]
        return "\n".join(lines) if lines else "(no categories)"

    @staticmethod
    def format_variant(variant: VariantDescriptor, value_names: Optional[Dict[str, str]] = None) -> str:
        """One line per variant: SKU, combination, price and stock"""
        names = value_names or {}
        combination = " / ".join(names.get(value_id, value_id) for value_id in variant.attribute_values)
        marker = "new" if variant.is_new else variant.id
        return (
            f"[{marker}] {variant.sku or '(no SKU)'}"
            f" ({combination or 'no attributes'})"
            f" price: {format_price(variant.price)}"
            f" stock: {variant.stock}"
        )

    @staticmethod
    def format_variant_plan(plan: VariantPlan, value_names: Optional[Dict[str, str]] = None) -> str:
        """Summary of what saving the plan will insert, update and delete"""
        lines = [
            f"Variants: {len(plan.variants)}"
            f" (add {len(plan.added)}, update {len(plan.updated)}, delete {len(plan.removed)})"
        ]
        lines.extend(Messages.format_variant(variant, value_names) for variant in plan.variants)
        if plan.removed:
            lines.append("To delete:")
            lines.extend(f"- {variant.id} {variant.sku}" for variant in plan.removed)
        return "\n".join(lines)

    @staticmethod
    def format_errors(errors: List[str]) -> str:
        """Validation report for the operator"""
        if not errors:
            return "✅ Variants are valid."
        return "❌ Please fix the following errors:\n" + "\n".join(f"- {error}" for error in errors)
