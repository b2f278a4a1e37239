"""jobFms accounts masters: papers, paper calculations, UPS lookup."""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy.orm import Session

from ..models import PaperCalculationMaster, PaperMaster, UPSMaster
from .records import get_or_404, insert_record, update_record

logger = logging.getLogger(__name__)


def _set_values(data: Mapping[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None}


# Papers

def list_papers(*, db: Session, category: str | None = None) -> list[PaperMaster]:
    query = db.query(PaperMaster)
    if category:
        query = query.filter(PaperMaster.category == category)
    return query.order_by(PaperMaster.paper_name, PaperMaster.id).all()


def create_paper(*, db: Session, data: Mapping[str, Any]) -> PaperMaster:
    return insert_record(db, PaperMaster(**_set_values(data)))


def update_paper(*, db: Session, paper_id: int, changes: Mapping[str, Any]) -> PaperMaster:
    return update_record(db, get_or_404(db, PaperMaster, paper_id), changes)


# Paper calculations

def list_paper_calculations(*, db: Session, paper_id: int | None = None) -> list[PaperCalculationMaster]:
    query = db.query(PaperCalculationMaster)
    if paper_id is not None:
        query = query.filter(PaperCalculationMaster.paper_id == paper_id)
    return query.order_by(PaperCalculationMaster.id).all()


def create_paper_calculation(*, db: Session, data: Mapping[str, Any]) -> PaperCalculationMaster:
    """Insert a costing row. ``paper_id`` is not checked against PaperMaster."""
    return insert_record(db, PaperCalculationMaster(**_set_values(data)))


def update_paper_calculation(
    *, db: Session, calculation_id: int, changes: Mapping[str, Any]
) -> PaperCalculationMaster:
    return update_record(db, get_or_404(db, PaperCalculationMaster, calculation_id), changes)


# UPS

def list_ups(*, db: Session, item_size_id: int | None = None) -> list[UPSMaster]:
    query = db.query(UPSMaster)
    if item_size_id is not None:
        query = query.filter(UPSMaster.item_size_id == item_size_id)
    return query.order_by(UPSMaster.id).all()


def create_ups(*, db: Session, data: Mapping[str, Any]) -> UPSMaster:
    record = UPSMaster(**_set_values(data))
    if record.ups is not None and record.ups <= 0:
        # accepted as-is: no positivity rule on ups
        logger.warning("UPSMaster stored with non-positive ups=%s", record.ups)
    return insert_record(db, record)


def update_ups(*, db: Session, ups_id: int, changes: Mapping[str, Any]) -> UPSMaster:
    return update_record(db, get_or_404(db, UPSMaster, ups_id), changes)
