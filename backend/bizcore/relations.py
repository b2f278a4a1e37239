"""Explicit relation graph between entities.

The graph is built once (``build_relation_graph``) and kept on the app state.
Lookups go through ``(entity name, alias)``; keys are advisory, so resolving a
dangling key yields ``None`` instead of an error.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Literal

from sqlalchemy.orm import Session

from .models import (
    Base,
    EnquiryForItems,
    PaperCalculationMaster,
    PaperMaster,
    Task,
    TelegramUser,
    UPSMaster,
    User,
)

RelationKind = Literal["belongs_to", "has_many"]


class UnknownRelationError(KeyError):
    """No entity or alias registered under the requested name."""


@dataclass(frozen=True)
class Relation:
    source: str
    alias: str
    target: str
    kind: RelationKind
    foreign_key: str


DEFAULT_ENTITIES: tuple[type[Base], ...] = (
    TelegramUser,
    User,
    Task,
    PaperMaster,
    PaperCalculationMaster,
    UPSMaster,
    EnquiryForItems,
)

DEFAULT_RELATIONS: tuple[Relation, ...] = (
    Relation("PaperCalculationMaster", "paper", "PaperMaster", "belongs_to", "paper_id"),
    Relation("PaperMaster", "calculations", "PaperCalculationMaster", "has_many", "paper_id"),
    Relation("UPSMaster", "paperSize", "PaperMaster", "belongs_to", "paper_size_id"),
)


class RelationGraph:
    """Immutable entity table plus relations indexed by source entity."""

    def __init__(self, entities: Mapping[str, type[Base]], relations: Iterable[Relation]):
        self._entities = MappingProxyType(dict(entities))
        by_source: dict[str, dict[str, Relation]] = {}
        for relation in relations:
            for name in (relation.source, relation.target):
                if name not in self._entities:
                    raise UnknownRelationError(name)
            model = self._entities[relation.source if relation.kind == "belongs_to" else relation.target]
            if relation.foreign_key not in model.__table__.columns:
                raise ValueError(
                    f"{model.__name__} has no column {relation.foreign_key!r} for relation {relation.alias!r}"
                )
            aliases = by_source.setdefault(relation.source, {})
            if relation.alias in aliases:
                raise ValueError(f"Duplicate relation {relation.source}.{relation.alias}")
            aliases[relation.alias] = relation
        self._relations = MappingProxyType(
            {source: MappingProxyType(aliases) for source, aliases in by_source.items()}
        )

    @property
    def entities(self) -> Mapping[str, type[Base]]:
        return self._entities

    def model(self, name: str) -> type[Base]:
        try:
            return self._entities[name]
        except KeyError:
            raise UnknownRelationError(name) from None

    def relations_of(self, source: str) -> Mapping[str, Relation]:
        self.model(source)
        return self._relations.get(source, MappingProxyType({}))

    def get(self, source: str, alias: str) -> Relation:
        relation = self.relations_of(source).get(alias)
        if relation is None:
            raise UnknownRelationError(f"{source}.{alias}")
        return relation

    def resolve(self, db: Session, record: Any, alias: str) -> Any:
        """Load the related record(s) for ``record`` through ``alias``."""
        relation = self.get(type(record).__name__, alias)
        target = self.model(relation.target)

        if relation.kind == "belongs_to":
            key = getattr(record, relation.foreign_key)
            if key is None:
                return None
            return db.get(target, key)

        if record.id is None:
            return []
        return (
            db.query(target)
            .filter(getattr(target, relation.foreign_key) == record.id)
            .order_by(target.id)
            .all()
        )

    def resolve_many(self, db: Session, records: list[Any], alias: str) -> dict[Any, Any]:
        """Batch variant of ``resolve`` for belongs-to relations, keyed by foreign key."""
        if not records:
            return {}
        relation = self.get(type(records[0]).__name__, alias)
        if relation.kind != "belongs_to":
            raise ValueError(f"resolve_many supports belongs_to relations only, got {relation.kind}")
        target = self.model(relation.target)
        keys = {getattr(r, relation.foreign_key) for r in records} - {None}
        if not keys:
            return {}
        rows = db.query(target).filter(target.id.in_(keys)).all()
        return {row.id: row for row in rows}


def build_relation_graph(
    entities: Iterable[type[Base]] = DEFAULT_ENTITIES,
    relations: Iterable[Relation] = DEFAULT_RELATIONS,
) -> RelationGraph:
    return RelationGraph({model.__name__: model for model in entities}, relations)
