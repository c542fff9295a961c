from fiverivers.crud import unit as unit_crud
from fiverivers.models.unit import Unit
from fiverivers.schemas.unit import UnitListItem
from fiverivers.services.base import EntityService


class UnitService(EntityService[Unit]):
    """Service layer for units (trucks)."""

    label = "unit"
    plural = "units"

    def decorate(self, db, items):
        counts = self.crud.job_counts(db, unit_ids=[u.id for u in items])
        rows = []
        for unit in items:
            row = UnitListItem.model_validate(unit)
            row.jobs_count = counts.get(unit.id, 0)
            rows.append(row)
        return rows


# Create a singleton instance
unit_service = UnitService(unit_crud)
