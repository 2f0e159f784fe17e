# backend/routers/vendors_router.py
from typing import List, Optional

from fastapi import APIRouter, Query

from errors import NotFoundError
from schemas.common import ApiResponse
from schemas.vendors import VendorOut
from services.vendor_service import vendor_service

router = APIRouter(prefix="/vendors", tags=["vendors"])


@router.get("", response_model=ApiResponse[List[VendorOut]])
def list_vendors(keyword: Optional[str] = Query(default=None)):
    vendors = vendor_service.search_vendors(keyword) if keyword else vendor_service.list_vendors()
    return ApiResponse[List[VendorOut]](data=[VendorOut(id=v.id, name=v.name) for v in vendors])


@router.get("/{vendor_id}", response_model=ApiResponse[VendorOut])
def get_vendor(vendor_id: str):
    v = vendor_service.get_vendor(vendor_id)
    if not v:
        raise NotFoundError("Vendor not found")
    return ApiResponse[VendorOut](data=VendorOut(id=v.id, name=v.name))
