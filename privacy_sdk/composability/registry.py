"""
Primitive Registry

Owns every registered primitive, its metadata projection, the category
index and the registered workflows. Lookups are soft: a missing id yields
``None`` (or ``False``), never an exception.

Re-registering an id overwrites the previous primitive (last write wins)
and moves it to its new category if that changed.
"""

from typing import Any, Dict, List, Optional

import structlog

from ..types import PrimitiveMetadata, PrivacyPrimitive, Workflow, utcnow

logger = structlog.get_logger(__name__)

_IMMUTABLE_METADATA_FIELDS = frozenset({"id", "created_at"})


class PrimitiveRegistry:
    """
    In-memory index of primitives, categories and workflows.

    Registries are plain objects; create one per context (or per test)
    rather than sharing a global instance.
    """

    def __init__(self) -> None:
        self._primitives: Dict[str, PrivacyPrimitive] = {}
        self._metadata: Dict[str, PrimitiveMetadata] = {}
        self._categories: Dict[str, List[str]] = {}
        self._workflows: Dict[str, Workflow] = {}

    # Primitives

    def register(self, primitive: PrivacyPrimitive) -> None:
        """Insert or overwrite a primitive by id."""
        if not isinstance(primitive, PrivacyPrimitive):
            raise TypeError(
                f"Expected a PrivacyPrimitive, got {type(primitive).__name__}"
            )

        previous = self._primitives.get(primitive.id)
        if previous is not None and previous.category != primitive.category:
            self._remove_from_category(previous.category, primitive.id)

        self._primitives[primitive.id] = primitive

        metadata = PrimitiveMetadata.from_primitive(primitive)
        existing = self._metadata.get(primitive.id)
        if existing is not None:
            metadata.created_at = existing.created_at
        self._metadata[primitive.id] = metadata

        ids = self._categories.setdefault(primitive.category, [])
        if primitive.id not in ids:
            ids.append(primitive.id)

        logger.info(
            "Primitive registered",
            id=primitive.id,
            name=primitive.name,
            category=primitive.category,
            overwritten=previous is not None,
        )

    def unregister(self, primitive_id: str) -> bool:
        """Remove a primitive and everything derived from it."""
        primitive = self._primitives.pop(primitive_id, None)
        if primitive is None:
            return False

        self._metadata.pop(primitive_id, None)
        self._remove_from_category(primitive.category, primitive_id)

        logger.info("Primitive unregistered", id=primitive_id)
        return True

    def _remove_from_category(self, category: str, primitive_id: str) -> None:
        ids = self._categories.get(category)
        if ids and primitive_id in ids:
            ids.remove(primitive_id)

    def get(self, primitive_id: str) -> Optional[PrivacyPrimitive]:
        return self._primitives.get(primitive_id)

    def get_metadata(self, primitive_id: str) -> Optional[PrimitiveMetadata]:
        return self._metadata.get(primitive_id)

    def get_by_category(self, category: str) -> List[PrivacyPrimitive]:
        """Primitives in ``category``, in registration order."""
        return [
            self._primitives[pid]
            for pid in self._categories.get(category, [])
            if pid in self._primitives
        ]

    def get_all_ids(self) -> List[str]:
        return list(self._primitives.keys())

    def get_all(self) -> List[PrivacyPrimitive]:
        return list(self._primitives.values())

    def search(self, query: str) -> List[PrivacyPrimitive]:
        """
        Case-insensitive substring match on name, description or any tag.

        Results keep registry insertion order.
        """
        needle = query.lower()
        return [
            primitive
            for primitive in self._primitives.values()
            if needle in primitive.name.lower()
            or needle in (primitive.description or "").lower()
            or any(needle in tag.lower() for tag in primitive.tags)
        ]

    def update_metadata(self, primitive_id: str, **updates: Any) -> bool:
        """Merge ``updates`` into a primitive's metadata and refresh ``updated_at``."""
        metadata = self._metadata.get(primitive_id)
        if metadata is None:
            return False

        for key, value in updates.items():
            if key in _IMMUTABLE_METADATA_FIELDS or not hasattr(metadata, key):
                logger.warning("Ignoring metadata field", id=primitive_id, field=key)
                continue
            setattr(metadata, key, value)
        metadata.updated_at = utcnow()
        return True

    def get_categories(self) -> List[str]:
        return list(self._categories.keys())

    def get_primitive_count_by_category(self) -> Dict[str, int]:
        return {category: len(ids) for category, ids in self._categories.items()}

    def __len__(self) -> int:
        return len(self._primitives)

    def __contains__(self, primitive_id: object) -> bool:
        return primitive_id in self._primitives

    # Workflows

    def register_workflow(self, workflow: Workflow) -> None:
        self._workflows[workflow.id] = workflow
        logger.info("Workflow registered", id=workflow.id, name=workflow.name)

    def unregister_workflow(self, workflow_id: str) -> bool:
        if self._workflows.pop(workflow_id, None) is None:
            return False
        logger.info("Workflow unregistered", id=workflow_id)
        return True

    def get_workflow(self, workflow_id: str) -> Optional[Workflow]:
        return self._workflows.get(workflow_id)

    def get_all_workflows(self) -> List[Workflow]:
        return list(self._workflows.values())
