# catalog/snapshot.py
import logging
from pathlib import Path
from typing import Union
from .models.product import CatalogSnapshot

logger = logging.getLogger(__name__)

def load_snapshot(path: Union[str, Path]) -> CatalogSnapshot:
    """Read categories, attributes and a product from a JSON file"""
    snapshot_path = Path(path)
    with open(snapshot_path, encoding="utf-8") as f:
        snapshot = CatalogSnapshot.model_validate_json(f.read())

    logger.info(
        f"Loaded {len(snapshot.categories)} categories and "
        f"{len(snapshot.attributes)} attributes from {snapshot_path}"
    )
    return snapshot
