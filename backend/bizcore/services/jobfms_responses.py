"""jobFms response serialization with batched relation loading."""
from __future__ import annotations

from collections import defaultdict

from sqlalchemy.orm import Session

from ..models import PaperCalculationMaster, PaperMaster, UPSMaster
from ..relations import RelationGraph
from ..schemas import (
    PaperBrief,
    PaperCalculationBrief,
    PaperCalculationResponse,
    PaperResponse,
    UPSResponse,
)


def _paper_brief(paper: PaperMaster | None) -> PaperBrief | None:
    return PaperBrief.model_validate(paper) if paper is not None else None


def paper_calculations_to_response(
    db: Session,
    relations: RelationGraph,
    calculations: list[PaperCalculationMaster],
) -> list[PaperCalculationResponse]:
    papers_by_id = relations.resolve_many(db, calculations, "paper")
    return [
        PaperCalculationResponse(
            id=calc.id,
            paper_id=calc.paper_id,
            wastage_sheets=calc.wastage_sheets,
            cutting_pattern=calc.cutting_pattern,
            notes=calc.notes,
            paper=_paper_brief(papers_by_id.get(calc.paper_id)),
            created_at=calc.created_at,
            updated_at=calc.updated_at,
        )
        for calc in calculations
    ]


def ups_to_response(
    db: Session,
    relations: RelationGraph,
    rows: list[UPSMaster],
) -> list[UPSResponse]:
    papers_by_id = relations.resolve_many(db, rows, "paperSize")
    return [
        UPSResponse(
            id=row.id,
            item_size_id=row.item_size_id,
            ups=row.ups,
            paper_size_id=row.paper_size_id,
            paper_size=_paper_brief(papers_by_id.get(row.paper_size_id)),
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
        for row in rows
    ]


def papers_to_response(
    db: Session,
    relations: RelationGraph,
    papers: list[PaperMaster],
) -> list[PaperResponse]:
    """Papers with their calculations, loaded in one query for the whole page."""
    relation = relations.get("PaperMaster", "calculations")
    calc_model = relations.model(relation.target)
    calcs_by_paper: dict[int, list] = defaultdict(list)
    paper_ids = [paper.id for paper in papers]
    if paper_ids:
        fk = getattr(calc_model, relation.foreign_key)
        for calc in db.query(calc_model).filter(fk.in_(paper_ids)).order_by(calc_model.id).all():
            calcs_by_paper[getattr(calc, relation.foreign_key)].append(calc)

    responses = []
    for paper in papers:
        response = PaperResponse.model_validate(paper)
        response.calculations = [
            PaperCalculationBrief.model_validate(calc) for calc in calcs_by_paper.get(paper.id, [])
        ]
        responses.append(response)
    return responses
