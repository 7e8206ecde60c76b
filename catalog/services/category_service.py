# catalog/services/category_service.py
import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional, Set, Tuple, Union
from ..models.category import Category, CategoryNode, OrphanPolicy

CategoryInput = Union[Category, Dict[str, Any]]

class CategoryCycleError(ValueError):
    """Raised when parent references loop back on themselves"""

    def __init__(self, cycle: List[str], message: Optional[str] = None):
        self.cycle = cycle
        super().__init__(message or f"Circular category parents: {' -> '.join(cycle)}")

class CategoryService:
    """Builds and queries category trees from flat category records.

    Records come from whoever fetched them (database rows, API payloads,
    a JSON snapshot). Nothing here is cached: the tree is rebuilt from the
    latest records on every call.
    """

    def __init__(self, orphan_policy: OrphanPolicy = OrphanPolicy.DROP):
        self.orphan_policy = OrphanPolicy(orphan_policy)
        self.logger = logging.getLogger(__name__)

    def build_tree(self, records: Iterable[CategoryInput]) -> List[CategoryNode]:
        """Turn flat records into a forest, keeping input order at every level"""
        categories = self._index(records)
        self._ensure_acyclic(categories)

        nodes: Dict[str, CategoryNode] = {}
        for category_id, category in categories.items():
            data = category.model_dump()
            data['children'] = []
            nodes[category_id] = CategoryNode.model_validate(data)

        roots: List[CategoryNode] = []
        dropped: List[CategoryNode] = []
        for category_id, category in categories.items():
            node = nodes[category_id]
            if category.parent_id is None:
                roots.append(node)
                continue

            parent = nodes.get(category.parent_id)
            if parent is not None:
                parent.children.append(node)
            elif self.orphan_policy is OrphanPolicy.PROMOTE:
                self.logger.warning(
                    f"Category {category_id} has unknown parent {category.parent_id}, promoted to root"
                )
                roots.append(node)
            else:
                dropped.append(node)

        # Children are attached only after the full pass, so subtree sizes are known here
        for node in dropped:
            descendants = sum(1 for _ in self.walk_tree(node.children))
            self.logger.warning(
                f"Category {node.id} has unknown parent {node.parent_id}, left out of the tree"
                f" with {descendants} descendant categories"
            )

        return roots

    @staticmethod
    def walk_tree(forest: Iterable[CategoryNode]) -> Iterator[Tuple[CategoryNode, int]]:
        """Pre-order walk yielding every node with its depth"""
        seen: Set[str] = set()
        stack = [(node, 0) for node in reversed(list(forest))]
        while stack:
            node, depth = stack.pop()
            if node.id in seen:
                raise CategoryCycleError(
                    [node.id], f"Category {node.id} appears more than once in the forest"
                )
            seen.add(node.id)
            yield node, depth
            stack.extend((child, depth + 1) for child in reversed(node.children))

    def flatten_name_index(self, forest: Iterable[CategoryNode]) -> Dict[str, str]:
        """Map every category id in the forest to its name"""
        return {node.id: node.name for node, _ in self.walk_tree(forest)}

    def get_subcategories(self, records: Iterable[CategoryInput], parent_id: str) -> List[Category]:
        """Direct children of a category, in input order"""
        return [
            category for category in self._index(records).values()
            if category.parent_id == parent_id
        ]

    def get_descendant_ids(self, records: Iterable[CategoryInput], category_id: str) -> Set[str]:
        """Ids of every category below the given one"""
        children: Dict[str, List[str]] = {}
        for category in self._index(records).values():
            if category.parent_id is not None:
                children.setdefault(category.parent_id, []).append(category.id)

        descendants: Set[str] = set()
        pending = list(children.get(category_id, []))
        while pending:
            current = pending.pop()
            if current in descendants or current == category_id:
                continue
            descendants.add(current)
            pending.extend(children.get(current, []))
        return descendants

    def check_circular_dependency(
        self,
        records: Iterable[CategoryInput],
        category_id: str,
        new_parent_id: Optional[str]
    ) -> bool:
        """Whether moving a category under new_parent_id would create a loop"""
        categories = self._index(records)
        current_id = new_parent_id
        visited: Set[str] = set()
        while current_id is not None:
            if current_id == category_id:
                return True
            if current_id in visited:
                # Already looping above us, without going through category_id
                return False
            visited.add(current_id)
            parent = categories.get(current_id)
            current_id = parent.parent_id if parent else None

        return False

    def get_parent_options(self, records: Iterable[CategoryInput], category_id: str) -> List[Category]:
        """Categories a category can be moved under without creating a loop"""
        categories = self._index(records)
        excluded = self.get_descendant_ids(categories.values(), category_id)
        excluded.add(category_id)
        return [category for category in categories.values() if category.id not in excluded]

    def _index(self, records: Iterable[CategoryInput]) -> Dict[str, Category]:
        categories: Dict[str, Category] = {}
        for record in records:
            category = record if isinstance(record, Category) else Category.model_validate(record)
            if category.id in categories:
                self.logger.warning(f"Duplicate category id {category.id}, keeping the first one")
                continue
            categories[category.id] = category
        return categories

    @staticmethod
    def _ensure_acyclic(categories: Dict[str, Category]) -> None:
        resolved: Set[str] = set()
        for category_id in categories:
            path: List[str] = []
            on_path: Set[str] = set()
            current = category_id
            while current in categories and current not in resolved:
                if current in on_path:
                    raise CategoryCycleError(path[path.index(current):] + [current])
                on_path.add(current)
                path.append(current)
                current = categories[current].parent_id
            resolved.update(path)
