from datetime import datetime
from enum import Enum
from typing import Annotated, List, Optional

from pydantic import AfterValidator, BaseModel, Field

MIN_VEHICLE_YEAR = 1900
VIN_LENGTH = 17


def _check_year(value: int) -> int:
    latest = datetime.now().year + 1
    if value < MIN_VEHICLE_YEAR or value > latest:
        raise ValueError(f"year must be between {MIN_VEHICLE_YEAR} and {latest}")
    return value


VehicleYear = Annotated[int, AfterValidator(_check_year)]


class ItemStatus(str, Enum):
    PASS = "pass"
    FAIL = "fail"
    NOT_APPLICABLE = "not_applicable"


# Update payloads are sparse patches: handlers read model_dump(exclude_unset=True),
# so a field that was never sent differs from one sent as null.
# The *Patch models are request bodies (id in the path), *Update adds the id.

# -------- Vehicles --------
class VehicleCreate(BaseModel):
    make: str = Field(..., min_length=1)
    model: str = Field(..., min_length=1)
    year: VehicleYear
    vin: str = Field(..., min_length=VIN_LENGTH, max_length=VIN_LENGTH)
    license_plate: str = Field(..., min_length=1)


class VehiclePatch(BaseModel):
    make: Optional[str] = Field(None, min_length=1)
    model: Optional[str] = Field(None, min_length=1)
    year: Optional[VehicleYear] = None
    vin: Optional[str] = Field(None, min_length=VIN_LENGTH, max_length=VIN_LENGTH)
    license_plate: Optional[str] = Field(None, min_length=1)


class VehicleUpdate(VehiclePatch):
    id: int


class Vehicle(BaseModel):
    id: int
    make: str
    model: str
    year: int
    vin: str
    license_plate: str
    created_at: datetime
    updated_at: datetime


# -------- Inspectors --------
class InspectorCreate(BaseModel):
    name: str = Field(..., min_length=1)
    employee_id: str = Field(..., min_length=1)


class InspectorPatch(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    employee_id: Optional[str] = Field(None, min_length=1)


class InspectorUpdate(InspectorPatch):
    id: int


class Inspector(BaseModel):
    id: int
    name: str
    employee_id: str
    created_at: datetime
    updated_at: datetime


# -------- Inspections --------
class InspectionCreate(BaseModel):
    vehicle_id: int
    inspector_id: int
    inspection_date: datetime
    notes: Optional[str] = None


class InspectionPatch(BaseModel):
    completed: Optional[bool] = None
    notes: Optional[str] = None


class InspectionUpdate(InspectionPatch):
    id: int


class Inspection(BaseModel):
    id: int
    vehicle_id: int
    inspector_id: int
    inspection_date: datetime
    completed: bool
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime


# -------- Inspection items --------
class InspectionItemInput(BaseModel):
    item_name: str = Field(..., min_length=1)
    status: ItemStatus
    comments: Optional[str] = None


class InspectionItemsPayload(BaseModel):
    items: List[InspectionItemInput] = Field(default_factory=list)


class InspectionItemsCreate(InspectionItemsPayload):
    inspection_id: int


class InspectionItemPatch(BaseModel):
    status: Optional[ItemStatus] = None
    comments: Optional[str] = None


class InspectionItemUpdate(InspectionItemPatch):
    id: int


class InspectionItem(BaseModel):
    id: int
    inspection_id: int
    item_name: str
    status: ItemStatus
    comments: Optional[str] = None
    created_at: datetime
    updated_at: datetime


# -------- Joined reads & reports --------
class InspectionWithDetails(Inspection):
    vehicle: Vehicle
    inspector: Inspector
    items: List[InspectionItem] = Field(default_factory=list)


class InspectionReport(BaseModel):
    total_inspections: int
    completed_inspections: int
    pending_inspections: int
    recent_inspections: List[InspectionWithDetails] = Field(default_factory=list)


class DeleteResult(BaseModel):
    success: bool


class VehicleListResponse(BaseModel):
    items: List[Vehicle]


class InspectorListResponse(BaseModel):
    items: List[Inspector]


class InspectionListResponse(BaseModel):
    items: List[Inspection]


class InspectionDetailsListResponse(BaseModel):
    items: List[InspectionWithDetails]


class InspectionItemListResponse(BaseModel):
    items: List[InspectionItem]
