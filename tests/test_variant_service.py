import itertools
import logging
from decimal import Decimal

from catalog.models import Attribute, AttributeValue, ProductVariant, VariantDescriptor
from catalog.services import VariantService


def _attribute(attribute_id, name, *values):
    return Attribute(
        id=attribute_id,
        name=name,
        values=[AttributeValue(id=value.lower(), value=value, attribute_id=attribute_id) for value in values],
    )


COLOR = _attribute("color", "Color", "Red", "Blue")
SIZE = _attribute("size", "Size", "S", "M")


def _ids(combinations):
    return [[value.id for value in combination] for combination in combinations]


def test_generate_combinations_orders_last_attribute_fastest() -> None:
    combinations = VariantService.generate_combinations([COLOR.values, SIZE.values])

    assert _ids(combinations) == [["red", "s"], ["red", "m"], ["blue", "s"], ["blue", "m"]]


def test_generate_combinations_without_attributes_is_one_empty_combination() -> None:
    assert VariantService.generate_combinations([]) == [[]]


def test_generate_combinations_single_attribute_gives_singletons() -> None:
    assert _ids(VariantService.generate_combinations([COLOR.values])) == [["red"], ["blue"]]


def test_generate_combinations_counts_and_uniqueness() -> None:
    value_sets = [
        [AttributeValue(id=f"{axis}{i}", value=f"{axis}{i}") for i in range(size)]
        for axis, size in (("a", 2), ("b", 3), ("c", 4))
    ]

    combinations = _ids(VariantService.generate_combinations(value_sets))

    assert len(combinations) == 2 * 3 * 4
    assert all(len(combination) == 3 for combination in combinations)
    assert len({tuple(combination) for combination in combinations}) == len(combinations)
    assert combinations == [list(c) for c in itertools.product(["a0", "a1"], ["b0", "b1", "b2"], ["c0", "c1", "c2", "c3"])]


def test_generate_combinations_with_an_empty_attribute_is_empty() -> None:
    assert VariantService.generate_combinations([COLOR.values, []]) == []


def test_generate_variants_builds_skus_and_defaults() -> None:
    variants = VariantService().generate_variants([COLOR, SIZE], "Dino Tee")

    assert [variant.sku for variant in variants] == [
        "Dino-Tee-Red-S", "Dino-Tee-Red-M", "Dino-Tee-Blue-S", "Dino-Tee-Blue-M"
    ]
    assert variants[0].attribute_values == ["red", "s"]
    assert all(variant.id is None for variant in variants)
    assert all(variant.price == Decimal("0") and variant.stock == 0 for variant in variants)
    assert variants[0].barcode == "" and variants[0].sale_price is None


def test_generate_variants_is_deterministic() -> None:
    service = VariantService()

    first = service.generate_variants([COLOR, SIZE], "Dino Tee")
    second = service.generate_variants([COLOR, SIZE], "Dino Tee")

    assert [(v.sku, v.attribute_values) for v in first] == [(v.sku, v.attribute_values) for v in second]


def test_generate_variants_without_attributes_is_empty() -> None:
    assert VariantService().generate_variants([], "Dino Tee") == []


def test_generate_variants_uses_configured_separator() -> None:
    pattern = _attribute("pattern", "Pattern", "Big Stripes")

    variants = VariantService(sku_separator="_").generate_variants([pattern], "  Dino   Tee ")

    assert variants[0].sku == "Dino_Tee_Big_Stripes"


def test_resolve_selected_attributes_keeps_catalog_order(caplog) -> None:
    fabric = _attribute("fabric", "Fabric", "Cotton")

    with caplog.at_level(logging.WARNING):
        selected = VariantService().resolve_selected_attributes([COLOR, SIZE, fabric], ["fabric", "nope", "color"])

    assert [attribute.id for attribute in selected] == ["color", "fabric"]
    assert "nope" in caplog.text


def _persisted(variant_id, values, **fields):
    fields.setdefault("sku", f"SKU-{variant_id}")
    return ProductVariant(id=variant_id, attribute_values=values, **fields)


def test_reconcile_inherits_ids_and_persisted_fields() -> None:
    service = VariantService()
    generated = service.generate_variants([COLOR, SIZE], "Dino Tee")
    existing = [
        _persisted("v1", ["s", "red"], price=Decimal("12.50"), stock=7, barcode="123"),
        _persisted("v2", ["green", "s"]),
    ]

    plan = service.reconcile_variants(generated, existing)

    assert [variant.id for variant in plan.variants] == ["v1", None, None, None]
    matched = plan.variants[0]
    assert matched.sku == "SKU-v1"
    assert matched.price == Decimal("12.50") and matched.stock == 7 and matched.barcode == "123"
    assert matched.attribute_values == ["red", "s"]
    assert [variant.id for variant in plan.updated] == ["v1"]
    assert [variant.sku for variant in plan.added] == ["Dino-Tee-Red-M", "Dino-Tee-Blue-S", "Dino-Tee-Blue-M"]
    assert plan.removed_ids == ["v2"]


def test_reconcile_can_reset_fields() -> None:
    service = VariantService()
    generated = service.generate_variants([COLOR], "Tee")

    plan = service.reconcile_variants(generated, [_persisted("v1", ["red"], price=Decimal("9"), stock=3)], retain_fields=False)

    assert plan.variants[0].id == "v1"
    assert plan.variants[0].sku == "Tee-Red"
    assert plan.variants[0].price == Decimal("0") and plan.variants[0].stock == 0


def test_reconcile_ignores_attribute_order() -> None:
    service = VariantService()
    existing = [_persisted("v1", ["m", "blue"]), _persisted("v2", ["red", "s"])]

    color_first = service.reconcile_variants(service.generate_variants([COLOR, SIZE], "Tee"), existing)
    size_first = service.reconcile_variants(service.generate_variants([SIZE, COLOR], "Tee"), existing)

    def classify(plan):
        return (
            sorted((tuple(sorted(v.attribute_values)), v.id) for v in plan.updated),
            sorted(tuple(sorted(v.attribute_values)) for v in plan.added),
            plan.removed_ids,
        )

    assert classify(color_first) == classify(size_first)


def test_reconcile_matches_each_persisted_variant_once() -> None:
    service = VariantService()
    existing = [_persisted("v1", ["red"]), _persisted("v2", ["red"])]

    plan = service.reconcile_variants(service.generate_variants([COLOR], "Tee"), existing)

    assert [variant.id for variant in plan.variants] == ["v1", None]
    assert plan.removed_ids == ["v2"]


def test_reconcile_without_persisted_variants_adds_everything() -> None:
    service = VariantService()

    plan = service.reconcile_variants(service.generate_variants([COLOR, SIZE], "Tee"), [])

    assert len(plan.added) == 4 and plan.updated == [] and plan.removed == []


def test_reconcile_returns_copies_of_generated_variants() -> None:
    service = VariantService()
    generated = service.generate_variants([COLOR], "Tee")

    plan = service.reconcile_variants(generated, [_persisted("v1", ["red"])])
    plan.variants[0].attribute_values.append("xl")
    plan.added[0].attribute_values.append("xl")

    assert generated[0].attribute_values == ["red"]
    assert generated[1].attribute_values == ["blue"]


def test_classify_changes_returns_copies() -> None:
    variants = [
        VariantDescriptor(id="v1", sku="A", attribute_values=["red"]),
        VariantDescriptor(sku="B", attribute_values=["blue"]),
    ]

    plan = VariantService().classify_changes(variants, [_persisted("v1", ["red"])])
    plan.updated[0].attribute_values.append("xl")
    plan.added[0].attribute_values.append("xl")

    assert variants[0].attribute_values == ["red"]
    assert variants[1].attribute_values == ["blue"]


def test_classify_changes_by_id() -> None:
    existing = [_persisted("v1", ["red"]), _persisted("v2", ["blue"])]
    variants = [
        VariantDescriptor(id="v1", sku="A", attribute_values=["red"]),
        VariantDescriptor(sku="B", attribute_values=["blue"]),
        VariantDescriptor(id="stale", sku="C", attribute_values=["green"]),
    ]

    plan = VariantService().classify_changes(variants, existing)

    assert [variant.id for variant in plan.updated] == ["v1"]
    assert [variant.sku for variant in plan.added] == ["B", "C"]
    assert all(variant.id is None for variant in plan.added)
    assert plan.removed_ids == ["v2"]
    assert [variant.sku for variant in plan.variants] == ["A", "B", "C"]


def test_reconcile_attributes() -> None:
    plan = VariantService.reconcile_attributes(["size", "fabric"], ["color", "size"])

    assert plan.added == ["fabric"]
    assert plan.kept == ["size"]
    assert plan.removed == ["color"]


def test_add_blank_variant_uses_sequential_sku() -> None:
    variants = VariantService.add_blank_variant([])
    variants = VariantService.add_blank_variant(variants)

    assert [variant.sku for variant in variants] == ["PROD-001", "PROD-002"]
    assert variants[1].attribute_values == [] and variants[1].id is None


def _priced(variants):
    return [variant.model_copy(update={"price": Decimal("10")}) for variant in variants]


def test_validate_variants_accepts_generated_and_priced_set() -> None:
    service = VariantService()
    variants = _priced(service.generate_variants([COLOR, SIZE], "Tee"))

    assert service.validate_variants(variants, [COLOR, SIZE]) == []


def test_validate_variants_reports_missing_attribute_values() -> None:
    variants = _priced([VariantDescriptor(sku="Tee-Red", attribute_values=["red"])])

    errors = VariantService.validate_variants(variants, [COLOR, SIZE])

    assert errors == ["Variant #1 is missing values for: Size"]


def test_validate_variants_reports_empty_attribute_values() -> None:
    errors = VariantService.validate_variants(_priced([VariantDescriptor(sku="X")]), [COLOR])

    assert errors == ["Variant #1 must have attribute values selected"]


def test_validate_variants_reports_sku_problems() -> None:
    variants = _priced([
        VariantDescriptor(sku="Tee-Red", attribute_values=["red"]),
        VariantDescriptor(sku="  ", attribute_values=["blue"]),
        VariantDescriptor(sku="Tee-Red", attribute_values=["blue"]),
    ])

    errors = VariantService.validate_variants(variants, [COLOR])

    assert errors == [
        "Variant #2: SKU is required",
        "Variant #3: SKU Tee-Red is already used by Variant #1",
    ]


def test_validate_variants_reports_price_and_stock() -> None:
    variants = [VariantDescriptor(sku="Tee-Red", attribute_values=["red"], stock=-1)]

    errors = VariantService.validate_variants(variants, [COLOR])

    assert errors == ["Variant #1: Valid price is required", "Variant #1: Stock cannot be negative"]


def test_validate_variants_requires_attributes_and_variants() -> None:
    assert VariantService.validate_variants([], []) == [
        "At least one attribute must be selected",
        "At least one variant is required",
    ]
