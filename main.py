# main.py
import argparse
import logging
from catalog.config import Config, setup_logging
from catalog.models import CatalogSnapshot, OrphanPolicy
from catalog.services import CategoryService, VariantService
from catalog.snapshot import load_snapshot
from catalog.utils.messages import Messages

def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Preview the category tree and variant matrix of a catalog snapshot.")
    p.add_argument("snapshot", nargs="?", default=Config.CATALOG_SNAPSHOT, help="catalog snapshot JSON file")
    p.add_argument("--no-retain", action="store_true", help="reset price and stock of matched variants")
    return p.parse_args(argv)

def preview(snapshot: CatalogSnapshot, retain_fields: bool = True) -> str:
    """Render the forest and, when a product is present, its regenerated variants"""
    category_service = CategoryService(OrphanPolicy(Config.ORPHAN_POLICY))
    variant_service = VariantService(Config.SKU_SEPARATOR)

    forest = category_service.build_tree(snapshot.categories)
    sections = ["Categories:", Messages.format_category_tree(forest)]

    product = snapshot.product
    if product is None:
        return "\n".join(sections)

    category_names = category_service.flatten_name_index(forest)
    category_name = category_names.get(product.category_id, "none") if product.category_id else "none"
    sections.append(f"\nProduct: {product.name} (category: {category_name})")

    attributes = variant_service.resolve_selected_attributes(snapshot.attributes, product.selected_attributes)
    generated = variant_service.generate_variants(attributes, product.name)
    plan = variant_service.reconcile_variants(generated, product.variants, retain_fields=retain_fields)

    value_names = {value.id: value.value for attribute in attributes for value in attribute.values}
    sections.append(Messages.format_variant_plan(plan, value_names))
    sections.append(Messages.format_errors(variant_service.validate_variants(plan.variants, attributes)))
    return "\n".join(sections)

def main(argv=None) -> int:
    # Setup logging
    setup_logging()
    logger = logging.getLogger(__name__)
    args = parse_args(argv)

    if not args.snapshot:
        logger.error("No snapshot given and CATALOG_SNAPSHOT is not set")
        return 2

    try:
        snapshot = load_snapshot(args.snapshot)
        print(preview(snapshot, retain_fields=not args.no_retain))
    except Exception as e:
        logger.error(f"Error building preview: {e}", exc_info=True)
        raise
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
