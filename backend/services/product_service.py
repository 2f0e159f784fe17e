# backend/services/product_service.py
"""
Product invariant guard.

Every product write goes through here: barcode uniqueness and vendor ids are
checked before the write, and the unique constraint catches the race where
two requests insert the same barcode at once.
"""

import logging
from typing import Iterable, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database.session import atomic
from errors import ConflictError, NotFoundError, ValidationError
from models.product_model import Product, ProductStatus
from queries.product_queries import ProductFilter, ProductQueries
from schemas.products import ProductCreate, ProductUpdate
from services.vendor_service import VendorService, vendor_service as default_vendor_service

logger = logging.getLogger(__name__)

BARCODE_EXISTS = "Barcode already exists"
HAS_DEPENDENT_ORDERS = "Product has dependent orders and cannot be deleted"
CONSTRAINT_VIOLATED = "Product conflicts with existing data"


class ProductService:
    def __init__(self, db: Session, vendors: Optional[VendorService] = None):
        self.db = db
        self.queries = ProductQueries(db)
        self.vendors = vendors or default_vendor_service

    # ---------- reads ----------

    def get_product(self, product_id: str) -> Product:
        product = self.queries.find_by_id(product_id)
        if not product:
            raise NotFoundError("Product not found")
        return product

    def get_product_by_barcode(self, barcode: str) -> Optional[Product]:
        return self.queries.find_by_barcode(barcode)

    def list_products(
        self, flt: Optional[ProductFilter] = None, page: int = 1, page_size: int = 20
    ) -> Tuple[List[Product], int]:
        flt = flt or ProductFilter()
        offset = (page - 1) * page_size
        items = self.queries.search(flt, offset=offset, limit=page_size)
        total = self.queries.count(flt)
        return items, total

    # ---------- guards ----------

    def _check_vendors(self, vendor_ids: Optional[List[str]]) -> None:
        if not vendor_ids:
            return
        if not self.vendors.validate_vendor_ids(vendor_ids):
            unknown = self.vendors.unknown_vendor_ids(vendor_ids)
            raise ValidationError("Invalid vendor IDs", details={"unknownVendors": unknown})

    def _check_barcode_free(self, barcode: str, exclude_id: Optional[str] = None) -> None:
        if self.queries.find_by_barcode(barcode, exclude_id=exclude_id):
            raise ConflictError(BARCODE_EXISTS)

    def _flush_unique(self, write) -> Product:
        # a concurrent writer may have taken the barcode after our check
        try:
            return write()
        except IntegrityError as e:
            if "barcode" in str(e.orig).lower():
                raise ConflictError(BARCODE_EXISTS) from e
            raise ConflictError(CONSTRAINT_VIOLATED) from e

    # ---------- writes ----------

    def create_product(self, data: ProductCreate) -> Product:
        with atomic(self.db):
            self._check_barcode_free(data.barcode)
            self._check_vendors(data.vendors)

            product = Product(
                name=data.name,
                barcode=data.barcode,
                cost_price=data.cost_price,
                sell_price=data.sell_price,
                status=data.status,
                is_ordered=False,
                vendors=list(data.vendors),
                tags=list(data.tags),
                note=data.note,
                image_path=data.image_path,
            )
            self._flush_unique(lambda: self.queries.insert(product))

        logger.info(f"Product created: {product.id} ({product.barcode})")
        return product

    def update_product(self, product_id: str, data: ProductUpdate) -> Product:
        patch = data.patch()
        with atomic(self.db):
            product = self.get_product(product_id)

            if "barcode" in patch and patch["barcode"] != product.barcode:
                self._check_barcode_free(patch["barcode"], exclude_id=product.id)

            if "vendors" in patch:
                self._check_vendors(patch["vendors"])

            self._flush_unique(lambda: self.queries.update_fields(product, patch))

        logger.info(f"Product updated: {product.id} fields={sorted(patch)}")
        return product

    def delete_product(self, product_id: str) -> None:
        with atomic(self.db):
            product = self.get_product(product_id)
            if self.queries.count_order_items_referencing(product.id) > 0:
                raise ConflictError(HAS_DEPENDENT_ORDERS)
            try:
                self.queries.delete(product)
            except IntegrityError as e:
                # an order item was added after the count; the FK decides
                raise ConflictError(HAS_DEPENDENT_ORDERS) from e

        logger.info(f"Product deleted: {product_id}")

    def set_status(self, product_id: str, status: ProductStatus) -> Product:
        with atomic(self.db):
            product = self.get_product(product_id)
            self.queries.update_fields(product, {"status": status})

        logger.info(f"Product {product_id}: status -> {status.value}")
        return product

    def set_ordered_flag(self, product_id: str, flag: bool) -> Product:
        with atomic(self.db):
            product = self.get_product(product_id)
            self.queries.update_fields(product, {"is_ordered": flag})

        logger.info(f"Product {product_id}: is_ordered -> {flag}")
        return product

    # ---------- batch ----------

    def batch_delete(self, product_ids: Iterable[str]) -> int:
        """Products that still have order items are skipped, not failed."""
        with atomic(self.db):
            deleted = self.queries.delete_unreferenced(product_ids)
        logger.info(f"Batch delete removed {deleted} product(s)")
        return deleted

    def batch_update_status(self, product_ids: Iterable[str], status: Optional[ProductStatus]) -> int:
        if status is None:
            raise ValidationError("status is required for updateStatus")
        with atomic(self.db):
            updated = self.queries.update_status_bulk(product_ids, status)
        logger.info(f"Batch status -> {status.value} on {updated} product(s)")
        return updated
