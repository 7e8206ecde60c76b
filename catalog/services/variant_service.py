# catalog/services/variant_service.py
import itertools
import logging
from typing import Dict, Iterable, List, Sequence
from ..models.attribute import Attribute, AttributeValue
from ..models.variant import (
    EDITABLE_FIELDS, AttributePlan, ProductVariant, VariantDescriptor, VariantPlan
)
from ..utils.formatters import build_sku, sequential_sku

class VariantService:
    """Variant matrix generation and reconciliation with persisted variants.

    Generation is destructive on purpose: the returned set replaces whatever
    variants the caller currently holds, manual edits included. Use
    reconcile_variants in the edit flow to carry persisted ids and fields over
    to the combinations that survived.
    """

    def __init__(self, sku_separator: str = "-"):
        self.sku_separator = sku_separator
        self.logger = logging.getLogger(__name__)

    @staticmethod
    def generate_combinations(value_sets: Sequence[Sequence[AttributeValue]]) -> List[List[AttributeValue]]:
        """Cartesian product, first attribute varying slowest.

        No value sets gives a single empty combination.
        """
        return [list(combination) for combination in itertools.product(*value_sets)]

    def resolve_selected_attributes(
        self,
        catalog: Iterable[Attribute],
        selected_ids: Iterable[str]
    ) -> List[Attribute]:
        """Selected attributes in catalog order"""
        wanted = set(selected_ids)
        selected = [attribute for attribute in catalog if attribute.id in wanted]
        unknown = wanted - {attribute.id for attribute in selected}
        if unknown:
            self.logger.warning(f"Ignoring unknown attribute ids: {', '.join(sorted(unknown))}")
        return selected

    def generate_variants(self, attributes: Sequence[Attribute], product_name: str) -> List[VariantDescriptor]:
        """One fresh variant per combination of the given attributes' values"""
        if not attributes:
            self.logger.info("No attributes selected, nothing to generate")
            return []

        combinations = self.generate_combinations([attribute.values for attribute in attributes])
        variants = [
            VariantDescriptor(
                sku=build_sku(
                    product_name,
                    (value.value for value in combination),
                    self.sku_separator
                ),
                attribute_values=[value.id for value in combination]
            )
            for combination in combinations
        ]
        self.logger.info(f"Generated {len(variants)} variants from {len(attributes)} attributes")
        return variants

    def reconcile_variants(
        self,
        generated: Iterable[VariantDescriptor],
        existing: Iterable[ProductVariant],
        retain_fields: bool = True
    ) -> VariantPlan:
        """Match generated variants to persisted ones by their attribute value sets"""
        existing = list(existing)
        by_values: Dict[frozenset, ProductVariant] = {}
        for variant in existing:
            if variant.value_set in by_values:
                self.logger.warning(
                    f"Variant {variant.id} repeats the attribute values of {by_values[variant.value_set].id}"
                )
                continue
            by_values[variant.value_set] = variant
        matched_ids = set()

        plan = VariantPlan()
        for descriptor in generated:
            persisted = by_values.pop(descriptor.value_set, None)
            if persisted is None:
                merged = descriptor.model_copy(update={'id': None}, deep=True)
                plan.added.append(merged)
            else:
                update = {'id': persisted.id}
                if retain_fields:
                    update.update({field: getattr(persisted, field) for field in EDITABLE_FIELDS})
                merged = descriptor.model_copy(update=update, deep=True)
                plan.updated.append(merged)
                matched_ids.add(persisted.id)
            plan.variants.append(merged)

        plan.removed = [variant for variant in existing if variant.id not in matched_ids]
        if plan.removed:
            self.logger.info(f"{len(plan.removed)} persisted variants no longer match a combination")
        return plan

    def classify_changes(
        self,
        variants: Iterable[VariantDescriptor],
        existing: Iterable[ProductVariant]
    ) -> VariantPlan:
        """Split the variants being saved into inserts, updates and deletes by id"""
        persisted = {variant.id: variant for variant in existing}
        plan = VariantPlan()
        kept = set()

        for variant in variants:
            if variant.id is not None and variant.id in persisted and variant.id not in kept:
                kept.add(variant.id)
                variant = variant.model_copy(deep=True)
                plan.updated.append(variant)
                plan.variants.append(variant)
                continue

            if variant.id is not None:
                self.logger.warning(f"Variant {variant.id} is not persisted for this product, saving as new")
                variant = variant.model_copy(update={'id': None}, deep=True)
            else:
                variant = variant.model_copy(deep=True)
            plan.added.append(variant)
            plan.variants.append(variant)

        plan.removed = [variant for variant_id, variant in persisted.items() if variant_id not in kept]
        return plan

    @staticmethod
    def reconcile_attributes(selected_ids: Sequence[str], existing_ids: Iterable[str]) -> AttributePlan:
        """Product attribute links to add, keep and remove"""
        existing = list(dict.fromkeys(existing_ids))
        selected = list(dict.fromkeys(selected_ids))
        return AttributePlan(
            added=[attribute_id for attribute_id in selected if attribute_id not in existing],
            kept=[attribute_id for attribute_id in selected if attribute_id in existing],
            removed=[attribute_id for attribute_id in existing if attribute_id not in selected]
        )

    @staticmethod
    def add_blank_variant(variants: Sequence[VariantDescriptor]) -> List[VariantDescriptor]:
        """Append an empty variant for manual entry"""
        return [*variants, VariantDescriptor(sku=sequential_sku(len(variants) + 1))]

    @staticmethod
    def validate_variants(
        variants: Sequence[VariantDescriptor],
        selected_attributes: Sequence[Attribute]
    ) -> List[str]:
        """Check a variant set before it is saved.

        Problems come back as messages for the operator; nothing is raised.
        """
        errors: List[str] = []

        if not selected_attributes:
            errors.append("At least one attribute must be selected")
        if not variants:
            errors.append("At least one variant is required")
            return errors

        attribute_of_value = {
            value.id: attribute.id
            for attribute in selected_attributes
            for value in attribute.values
        }
        sku_owner: Dict[str, int] = {}

        for index, variant in enumerate(variants, start=1):
            label = f"Variant #{index}"

            if not variant.attribute_values:
                errors.append(f"{label} must have attribute values selected")
            else:
                covered = {
                    attribute_of_value[value_id]
                    for value_id in variant.attribute_values
                    if value_id in attribute_of_value
                }
                missing = [attribute.name for attribute in selected_attributes if attribute.id not in covered]
                if missing:
                    errors.append(f"{label} is missing values for: {', '.join(missing)}")

            sku = variant.sku.strip()
            if not sku:
                errors.append(f"{label}: SKU is required")
            elif sku in sku_owner:
                errors.append(f"{label}: SKU {sku} is already used by Variant #{sku_owner[sku]}")
            else:
                sku_owner[sku] = index

            if variant.price <= 0:
                errors.append(f"{label}: Valid price is required")
            if variant.stock < 0:
                errors.append(f"{label}: Stock cannot be negative")

        return errors
