from typing import Optional

from fastapi import APIRouter, Depends

from ..db import get_db
from ..schemas import DeleteResult, Inspector, InspectorCreate, InspectorListResponse, InspectorPatch, InspectorUpdate
from ..services import inspectors as inspector_service

router = APIRouter(prefix="/inspectors", tags=["inspectors"])


@router.get("", response_model=InspectorListResponse)
def list_inspectors(conn=Depends(get_db)):
    return {"items": inspector_service.get_inspectors(conn)}


@router.post("", status_code=201, response_model=Inspector)
def create_inspector(payload: InspectorCreate, conn=Depends(get_db)):
    return inspector_service.create_inspector(conn, payload)


@router.get("/{inspector_id}", response_model=Optional[Inspector])
def get_inspector(inspector_id: int, conn=Depends(get_db)):
    return inspector_service.get_inspector_by_id(conn, inspector_id)


@router.patch("/{inspector_id}", response_model=Inspector)
def update_inspector(inspector_id: int, payload: InspectorPatch, conn=Depends(get_db)):
    update = InspectorUpdate(id=inspector_id, **payload.model_dump(exclude_unset=True))
    return inspector_service.update_inspector(conn, update)


@router.delete("/{inspector_id}", response_model=DeleteResult)
def delete_inspector(inspector_id: int, conn=Depends(get_db)):
    return inspector_service.delete_inspector(conn, inspector_id)
