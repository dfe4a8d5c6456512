from typing import Optional

from fastapi import APIRouter, Depends

from ..db import get_db
from ..schemas import (
    DeleteResult,
    InspectionDetailsListResponse,
    Vehicle,
    VehicleCreate,
    VehicleListResponse,
    VehiclePatch,
    VehicleUpdate,
)
from ..services import inspections as inspection_service, vehicles as vehicle_service

router = APIRouter(prefix="/vehicles", tags=["vehicles"])


@router.get("", response_model=VehicleListResponse)
def list_vehicles(conn=Depends(get_db)):
    return {"items": vehicle_service.get_vehicles(conn)}


@router.post("", status_code=201, response_model=Vehicle)
def create_vehicle(payload: VehicleCreate, conn=Depends(get_db)):
    return vehicle_service.create_vehicle(conn, payload)


@router.get("/{vehicle_id}", response_model=Optional[Vehicle])
def get_vehicle(vehicle_id: int, conn=Depends(get_db)):
    return vehicle_service.get_vehicle_by_id(conn, vehicle_id)


@router.patch("/{vehicle_id}", response_model=Vehicle)
def update_vehicle(vehicle_id: int, payload: VehiclePatch, conn=Depends(get_db)):
    update = VehicleUpdate(id=vehicle_id, **payload.model_dump(exclude_unset=True))
    return vehicle_service.update_vehicle(conn, update)


@router.delete("/{vehicle_id}", response_model=DeleteResult)
def delete_vehicle(vehicle_id: int, conn=Depends(get_db)):
    return vehicle_service.delete_vehicle(conn, vehicle_id)


@router.get("/{vehicle_id}/inspections", response_model=InspectionDetailsListResponse)
def list_vehicle_inspections(vehicle_id: int, conn=Depends(get_db)):
    return {"items": inspection_service.get_vehicle_inspections(conn, vehicle_id)}
