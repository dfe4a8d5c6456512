from typing import Optional

from fastapi import APIRouter, Depends

from ..db import get_db
from ..schemas import (
    Inspection,
    InspectionCreate,
    InspectionItemListResponse,
    InspectionItemsCreate,
    InspectionItemsPayload,
    InspectionListResponse,
    InspectionPatch,
    InspectionUpdate,
    InspectionWithDetails,
)
from ..services import inspection_items as item_service, inspections as inspection_service

router = APIRouter(prefix="/inspections", tags=["inspections"])


@router.get("", response_model=InspectionListResponse)
def list_inspections(conn=Depends(get_db)):
    return {"items": inspection_service.get_inspections(conn)}


@router.post("", status_code=201, response_model=Inspection)
def create_inspection(payload: InspectionCreate, conn=Depends(get_db)):
    return inspection_service.create_inspection(conn, payload)


@router.patch("/{inspection_id}", response_model=Inspection)
def update_inspection(inspection_id: int, payload: InspectionPatch, conn=Depends(get_db)):
    update = InspectionUpdate(id=inspection_id, **payload.model_dump(exclude_unset=True))
    return inspection_service.update_inspection(conn, update)


@router.get("/{inspection_id}/details", response_model=Optional[InspectionWithDetails])
def get_inspection_details(inspection_id: int, conn=Depends(get_db)):
    return inspection_service.get_inspection_details(conn, inspection_id)


@router.post("/{inspection_id}/items", status_code=201, response_model=InspectionItemListResponse)
def add_inspection_items(inspection_id: int, payload: InspectionItemsPayload, conn=Depends(get_db)):
    create = InspectionItemsCreate(inspection_id=inspection_id, items=payload.items)
    return {"items": item_service.create_inspection_items(conn, create)}
