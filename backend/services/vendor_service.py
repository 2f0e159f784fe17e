# backend/services/vendor_service.py
"""
Static vendor registry.

Vendors are reference data shared with the storefront; they are not stored
in the database, so product.vendors ids are validated against this table
when they are assigned and never re-checked afterwards.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional


@dataclass(frozen=True)
class Vendor:
    id: str
    name: str


VENDORS: List[Vendor] = [
    Vendor("01", "久益"),
    Vendor("02", "益發"),
    Vendor("03", "華"),
    Vendor("05", "長呈"),
    Vendor("08", "台利"),
    Vendor("12", "博志"),
    Vendor("15", "金禾"),
    Vendor("17", "松果"),
    Vendor("20", "天母"),
    Vendor("23", "承佑"),
]


class VendorService:
    def __init__(self, vendors: Optional[Iterable[Vendor]] = None):
        self._vendors: List[Vendor] = list(vendors if vendors is not None else VENDORS)
        self._by_id: Dict[str, Vendor] = {v.id: v for v in self._vendors}

    def list_vendors(self) -> List[Vendor]:
        return list(self._vendors)

    def get_vendor(self, vendor_id: str) -> Optional[Vendor]:
        return self._by_id.get(vendor_id)

    def get_vendors_by_ids(self, vendor_ids: Iterable[str]) -> List[Vendor]:
        wanted = set(vendor_ids)
        return [v for v in self._vendors if v.id in wanted]

    def validate_vendor_ids(self, vendor_ids: Optional[Iterable[str]]) -> bool:
        """True only for a non-empty list whose every id is registered."""
        ids = list(vendor_ids or [])
        if not ids:
            return False
        return all(vid in self._by_id for vid in ids)

    def unknown_vendor_ids(self, vendor_ids: Iterable[str]) -> List[str]:
        return [vid for vid in vendor_ids if vid not in self._by_id]

    def vendor_name_map(self) -> Dict[str, str]:
        return {v.id: v.name for v in self._vendors}

    def search_vendors(self, keyword: str) -> List[Vendor]:
        kw = keyword.lower()
        return [v for v in self._vendors if kw in v.name.lower() or keyword in v.id]


vendor_service = VendorService()
