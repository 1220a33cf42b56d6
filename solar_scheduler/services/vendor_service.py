# services/vendor_service.py
from typing import List, Optional

from ..filters import filter_vendors
from ..forms import VendorFormController
from ..models.vendor import Vendor
from ..state import ListState, RecordsLoaded, QueryChanged, reduce_list
from ..stores import ModelStore

from .. import logger


class VendorService:
    def __init__(self, owner=None, store=None):
        self.store = store or ModelStore(Vendor, owner)

    def list_vendors(self, query: str = '') -> List[Vendor]:
        """Active vendors matching the query, ordered by name"""
        state = ListState(filter_fn=filter_vendors)
        state = reduce_list(state, RecordsLoaded(self.store.query(sort_by='name')))
        state = reduce_list(state, QueryChanged(query))
        return list(state.visible)

    def get_vendor(self, vendor_id: int) -> Optional[Vendor]:
        return self.store.get(vendor_id)

    def create_vendor(self, data: dict):
        logger.info(f"Creating new vendor with data: {data}")
        return VendorFormController(self.store).submit(data)

    def update_vendor(self, vendor: Vendor, data: dict):
        logger.info(f"Updating vendor {vendor.id}")
        return VendorFormController(self.store, vendor).submit(data)

    def delete_vendor(self, vendor: Vendor) -> None:
        self.store.delete(vendor)

    def rate_vendor(self, vendor: Vendor, rating: float) -> Vendor:
        """Store a new rating, clamped to 0-5"""
        vendor.update_rating(rating)
        logger.info(f"Rated vendor {vendor.id}: {vendor.rating}")
        return self.store.update(vendor)
