"""jobFms accounts masters and enquiry item endpoints."""
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session
from typing import Optional

from ..database import get_db
from ..dependencies import get_relations
from ..models import EnquiryForItems, PaperCalculationMaster, PaperMaster, UPSMaster
from ..relations import RelationGraph
from ..schemas import (
    EnquiryItemCreate,
    EnquiryItemResponse,
    EnquiryItemUpdate,
    PaperCalculationCreate,
    PaperCalculationResponse,
    PaperCalculationUpdate,
    PaperCreate,
    PaperResponse,
    PaperUpdate,
    UPSCreate,
    UPSResponse,
    UPSUpdate,
)
from ..services.jobfms_responses import (
    paper_calculations_to_response,
    papers_to_response,
    ups_to_response,
)
from ..use_cases.enquiry_items import add_enquiry_item, list_enquiry_items, update_enquiry_item
from ..use_cases.jobfms_masters import (
    create_paper,
    create_paper_calculation,
    create_ups,
    list_paper_calculations,
    list_papers,
    list_ups,
    update_paper,
    update_paper_calculation,
    update_ups,
)
from ..use_cases.records import delete_record, get_or_404

router = APIRouter(prefix="/jobfms", tags=["jobfms"])


# Papers

@router.get("/papers", response_model=list[PaperResponse])
def get_papers(
    category: Optional[str] = None,
    db: Session = Depends(get_db),
    relations: RelationGraph = Depends(get_relations),
):
    return papers_to_response(db, relations, list_papers(db=db, category=category))


@router.post("/papers", response_model=PaperResponse, status_code=201)
def post_paper(
    data: PaperCreate,
    db: Session = Depends(get_db),
    relations: RelationGraph = Depends(get_relations),
):
    paper = create_paper(db=db, data=data.model_dump(exclude_unset=True))
    return papers_to_response(db, relations, [paper])[0]


@router.get("/papers/{paper_id}", response_model=PaperResponse)
def get_paper(
    paper_id: int,
    db: Session = Depends(get_db),
    relations: RelationGraph = Depends(get_relations),
):
    return papers_to_response(db, relations, [get_or_404(db, PaperMaster, paper_id)])[0]


@router.patch("/papers/{paper_id}", response_model=PaperResponse)
def patch_paper(
    paper_id: int,
    data: PaperUpdate,
    db: Session = Depends(get_db),
    relations: RelationGraph = Depends(get_relations),
):
    paper = update_paper(db=db, paper_id=paper_id, changes=data.model_dump(exclude_unset=True))
    return papers_to_response(db, relations, [paper])[0]


@router.delete("/papers/{paper_id}", status_code=204)
def delete_paper(paper_id: int, db: Session = Depends(get_db)):
    """Delete a paper. Calculations / UPS rows pointing at it are left as they are."""
    delete_record(db, get_or_404(db, PaperMaster, paper_id))
    return Response(status_code=204)


# Paper calculations

@router.get("/paper-calculations", response_model=list[PaperCalculationResponse])
def get_paper_calculations(
    paper_id: Optional[int] = None,
    db: Session = Depends(get_db),
    relations: RelationGraph = Depends(get_relations),
):
    return paper_calculations_to_response(db, relations, list_paper_calculations(db=db, paper_id=paper_id))


@router.post("/paper-calculations", response_model=PaperCalculationResponse, status_code=201)
def post_paper_calculation(
    data: PaperCalculationCreate,
    db: Session = Depends(get_db),
    relations: RelationGraph = Depends(get_relations),
):
    calc = create_paper_calculation(db=db, data=data.model_dump(exclude_unset=True))
    return paper_calculations_to_response(db, relations, [calc])[0]


@router.get("/paper-calculations/{calculation_id}", response_model=PaperCalculationResponse)
def get_paper_calculation(
    calculation_id: int,
    db: Session = Depends(get_db),
    relations: RelationGraph = Depends(get_relations),
):
    calc = get_or_404(db, PaperCalculationMaster, calculation_id)
    return paper_calculations_to_response(db, relations, [calc])[0]


@router.patch("/paper-calculations/{calculation_id}", response_model=PaperCalculationResponse)
def patch_paper_calculation(
    calculation_id: int,
    data: PaperCalculationUpdate,
    db: Session = Depends(get_db),
    relations: RelationGraph = Depends(get_relations),
):
    calc = update_paper_calculation(
        db=db,
        calculation_id=calculation_id,
        changes=data.model_dump(exclude_unset=True),
    )
    return paper_calculations_to_response(db, relations, [calc])[0]


@router.delete("/paper-calculations/{calculation_id}", status_code=204)
def delete_paper_calculation(calculation_id: int, db: Session = Depends(get_db)):
    delete_record(db, get_or_404(db, PaperCalculationMaster, calculation_id))
    return Response(status_code=204)


# UPS

@router.get("/ups", response_model=list[UPSResponse])
def get_ups_rows(
    item_size_id: Optional[int] = None,
    db: Session = Depends(get_db),
    relations: RelationGraph = Depends(get_relations),
):
    return ups_to_response(db, relations, list_ups(db=db, item_size_id=item_size_id))


@router.post("/ups", response_model=UPSResponse, status_code=201)
def post_ups(
    data: UPSCreate,
    db: Session = Depends(get_db),
    relations: RelationGraph = Depends(get_relations),
):
    row = create_ups(db=db, data=data.model_dump(exclude_unset=True))
    return ups_to_response(db, relations, [row])[0]


@router.get("/ups/{ups_id}", response_model=UPSResponse)
def get_ups(
    ups_id: int,
    db: Session = Depends(get_db),
    relations: RelationGraph = Depends(get_relations),
):
    return ups_to_response(db, relations, [get_or_404(db, UPSMaster, ups_id)])[0]


@router.patch("/ups/{ups_id}", response_model=UPSResponse)
def patch_ups(
    ups_id: int,
    data: UPSUpdate,
    db: Session = Depends(get_db),
    relations: RelationGraph = Depends(get_relations),
):
    row = update_ups(db=db, ups_id=ups_id, changes=data.model_dump(exclude_unset=True))
    return ups_to_response(db, relations, [row])[0]


@router.delete("/ups/{ups_id}", status_code=204)
def delete_ups(ups_id: int, db: Session = Depends(get_db)):
    delete_record(db, get_or_404(db, UPSMaster, ups_id))
    return Response(status_code=204)


# Enquiry items

@router.get("/enquiry/items", response_model=list[EnquiryItemResponse])
def get_enquiry_items(db: Session = Depends(get_db)):
    """List the enquiry-for items."""
    return list_enquiry_items(db=db)


@router.post("/enquiry/items", response_model=EnquiryItemResponse, status_code=201)
def post_enquiry_item(data: EnquiryItemCreate, db: Session = Depends(get_db)):
    return add_enquiry_item(db=db, item=data.item)


@router.patch("/enquiry/items/{item_id}", response_model=EnquiryItemResponse)
def patch_enquiry_item(item_id: int, data: EnquiryItemUpdate, db: Session = Depends(get_db)):
    return update_enquiry_item(db=db, item_id=item_id, item=data.item)


@router.delete("/enquiry/items/{item_id}", status_code=204)
def delete_enquiry_item(item_id: int, db: Session = Depends(get_db)):
    delete_record(db, get_or_404(db, EnquiryForItems, item_id))
    return Response(status_code=204)
