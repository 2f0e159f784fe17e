# backend/schemas/vendors.py
from schemas.common import CamelModel


class VendorOut(CamelModel):
    id: str
    name: str
