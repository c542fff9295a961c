from fiverivers.crud import dispatcher as dispatcher_crud
from fiverivers.models.dispatcher import Dispatcher
from fiverivers.schemas.dispatcher import DispatcherListItem
from fiverivers.services.base import EntityService


class DispatcherService(EntityService[Dispatcher]):
    """Service layer for dispatchers, the clients invoices are billed to."""

    label = "dispatcher"
    plural = "dispatchers"

    def decorate(self, db, items):
        ids = [d.id for d in items]
        job_counts = self.crud.job_counts(db, dispatcher_ids=ids)
        invoice_counts = self.crud.invoice_counts(db, dispatcher_ids=ids)
        rows = []
        for dispatcher in items:
            row = DispatcherListItem.model_validate(dispatcher)
            row.jobs_count = job_counts.get(dispatcher.id, 0)
            row.invoices_count = invoice_counts.get(dispatcher.id, 0)
            rows.append(row)
        return rows


# Create a singleton instance
dispatcher_service = DispatcherService(dispatcher_crud)
