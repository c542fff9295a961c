from typing import Dict, List
from sqlalchemy.orm import Session
from sqlalchemy import select, func
from fiverivers.crud.base import CRUDBase
from fiverivers.models.dispatcher import Dispatcher
from fiverivers.models.invoice import Invoice
from fiverivers.models.job import Job
from fiverivers.schemas.dispatcher import DispatcherCreate, DispatcherUpdate


class CRUDDispatcher(CRUDBase[Dispatcher, DispatcherCreate, DispatcherUpdate]):
    """
    CRUD operations for Dispatcher model.
    """

    search_fields = ("name", "email")
    order_by = (Dispatcher.name.asc(), Dispatcher.id.asc())

    def job_counts(self, db: Session, *, dispatcher_ids: List[int]) -> Dict[int, int]:
        if not dispatcher_ids:
            return {}
        stmt = (
            select(Job.dispatcher_id, func.count(Job.id))
            .where(Job.dispatcher_id.in_(dispatcher_ids))
            .group_by(Job.dispatcher_id)
        )
        return dict(db.execute(stmt).all())

    def invoice_counts(self, db: Session, *, dispatcher_ids: List[int]) -> Dict[int, int]:
        if not dispatcher_ids:
            return {}
        stmt = (
            select(Invoice.dispatcher_id, func.count(Invoice.id))
            .where(Invoice.dispatcher_id.in_(dispatcher_ids))
            .group_by(Invoice.dispatcher_id)
        )
        return dict(db.execute(stmt).all())


# Create a singleton instance
dispatcher = CRUDDispatcher(Dispatcher)
