from typing import Dict, List
from sqlalchemy.orm import Session
from sqlalchemy import select, func
from fiverivers.crud.base import CRUDBase
from fiverivers.models.job import Job
from fiverivers.models.unit import Unit
from fiverivers.schemas.unit import UnitCreate, UnitUpdate


class CRUDUnit(CRUDBase[Unit, UnitCreate, UnitUpdate]):
    """
    CRUD operations for Unit model.
    """

    search_fields = ("name", "plate_number", "vin")
    order_by = (Unit.name.asc(), Unit.id.asc())

    def job_counts(self, db: Session, *, unit_ids: List[int]) -> Dict[int, int]:
        if not unit_ids:
            return {}
        stmt = (
            select(Job.unit_id, func.count(Job.id))
            .where(Job.unit_id.in_(unit_ids))
            .group_by(Job.unit_id)
        )
        return dict(db.execute(stmt).all())


# Create a singleton instance
unit = CRUDUnit(Unit)
