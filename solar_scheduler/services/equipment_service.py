# services/equipment_service.py
from functools import partial
from typing import List, Optional

from ..errors import InvalidFieldValue
from ..filters import filter_equipment
from ..forms import EquipmentFormController
from ..models.equipment import Equipment
from ..state import ListState, RecordsLoaded, QueryChanged, reduce_list
from ..stores import ModelStore

from .. import logger


class EquipmentService:
    """Inventory for one signed-in user"""

    def __init__(self, owner=None, store=None):
        self.store = store or ModelStore(Equipment, owner)

    def list_equipment(self, query: str = '', category=None, low_stock_only: bool = False) -> List[Equipment]:
        """Items matching the query on name, brand, model and category, ordered by name"""
        state = ListState(filter_fn=partial(filter_equipment, category=category, low_stock_only=low_stock_only))
        state = reduce_list(state, RecordsLoaded(self.store.query(sort_by='name')))
        state = reduce_list(state, QueryChanged(query))
        return list(state.visible)

    def get_equipment(self, equipment_id: int) -> Optional[Equipment]:
        return self.store.get(equipment_id)

    def create_equipment(self, data: dict):
        logger.info(f"Creating new equipment with data: {data}")
        return EquipmentFormController(self.store).submit(data)

    def update_equipment(self, equipment: Equipment, data: dict):
        logger.info(f"Updating equipment {equipment.id}")
        return EquipmentFormController(self.store, equipment).submit(data)

    def delete_equipment(self, equipment: Equipment) -> None:
        self.store.delete(equipment)

    def adjust_stock(self, equipment: Equipment, adjustment: int) -> Equipment:
        if adjustment == 0:
            raise InvalidFieldValue('adjustment', "Adjustment must not be zero")
        equipment.adjust_stock(adjustment)
        logger.info(f"Adjusted stock of equipment {equipment.id} by {adjustment}: now {equipment.quantity}")
        return self.store.update(equipment)
