from fastapi import APIRouter, Depends

from ..db import get_db
from ..schemas import InspectionItem, InspectionItemPatch, InspectionItemUpdate
from ..services import inspection_items as item_service

router = APIRouter(prefix="/inspection-items", tags=["inspection-items"])


@router.get("/suggestions")
def list_item_suggestions():
    """Checklist names the inspection form offers; any other name is accepted too."""
    return {"items": item_service.get_item_suggestions()}


@router.patch("/{item_id}", response_model=InspectionItem)
def update_inspection_item(item_id: int, payload: InspectionItemPatch, conn=Depends(get_db)):
    update = InspectionItemUpdate(id=item_id, **payload.model_dump(exclude_unset=True))
    return item_service.update_inspection_item(conn, update)
