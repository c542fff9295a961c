"""
GraphQL schema served at ``/graphql``.

Queries and mutations call the same service layer as the REST routers, so
reference checks, job pricing and invoice totals behave identically on both
surfaces. Service errors are reported as GraphQL errors carrying the HTTP
status code in ``extensions.code``.
"""
from contextlib import contextmanager
from typing import List, Optional

import strawberry
from fastapi import Depends, HTTPException
from graphql import GraphQLError
from pydantic import ValidationError
from sqlalchemy.orm import Session
from strawberry.fastapi import GraphQLRouter
from strawberry.types import Info

from fiverivers.core.config import settings
from fiverivers.database import get_db
from fiverivers.dependencies import get_current_user
from fiverivers.models.job import InvoiceStatus
from fiverivers.models.user import User
from fiverivers.schemas.company import CompanyCreate, CompanyUpdate
from fiverivers.schemas.dispatcher import DispatcherCreate, DispatcherUpdate
from fiverivers.schemas.driver import DriverCreate, DriverUpdate
from fiverivers.schemas.invoice import InvoiceCreate
from fiverivers.schemas.job import JobCreate, JobUpdate
from fiverivers.schemas.job_type import JobTypeCreate, JobTypeUpdate
from fiverivers.schemas.unit import UnitCreate, UnitUpdate
from fiverivers.services import (
    company_service,
    dashboard_service,
    dispatcher_service,
    driver_service,
    invoice_service,
    job_service,
    job_type_service,
    unit_service,
)
from fiverivers.graphql.inputs import (
    CompanyInput,
    DispatcherInput,
    DriverInput,
    InvoiceInput,
    JobFilter,
    JobInput,
    JobTypeInput,
    UnitInput,
    set_fields,
)
from fiverivers.graphql.types import (
    CompanyNode,
    DashboardStatsNode,
    DispatcherNode,
    DriverNode,
    InvoiceNode,
    JobNode,
    JobTypeNode,
    UnitNode,
)


@contextmanager
def api_errors():
    try:
        yield
    except HTTPException as e:
        raise GraphQLError(str(e.detail), extensions={"code": e.status_code}) from e
    except ValidationError as e:
        raise GraphQLError(
            "Invalid request",
            extensions={"code": 400, "details": [err["msg"] for err in e.errors()]},
        ) from e


def _db(info: Info) -> Session:
    return info.context["db"]


def _get(service, info: Info, id: int):
    with api_errors():
        return service.get(db=_db(info), id=id)


def _create(service, schema, info: Info, data):
    with api_errors():
        return service.create(db=_db(info), obj_in=schema.model_validate(set_fields(data)))


def _update(service, schema, info: Info, id: int, data):
    with api_errors():
        return service.update(db=_db(info), id=id, obj_in=schema.model_validate(set_fields(data)))


def _delete(service, info: Info, id: int) -> bool:
    with api_errors():
        service.delete(db=_db(info), id=id)
    return True


@strawberry.type
class Query:
    @strawberry.field
    def companies(self, info: Info, limit: int = 100, offset: int = 0) -> List[CompanyNode]:
        return CompanyNode.from_models(company_service.list_all(_db(info), skip=offset, limit=limit))

    @strawberry.field
    def company(self, info: Info, id: int) -> Optional[CompanyNode]:
        return CompanyNode.from_model(_get(company_service, info, id))

    @strawberry.field
    def drivers(self, info: Info, limit: int = 100, offset: int = 0) -> List[DriverNode]:
        return DriverNode.from_models(driver_service.list_all(_db(info), skip=offset, limit=limit))

    @strawberry.field
    def driver(self, info: Info, id: int) -> Optional[DriverNode]:
        return DriverNode.from_model(_get(driver_service, info, id))

    @strawberry.field
    def dispatchers(self, info: Info, limit: int = 100, offset: int = 0) -> List[DispatcherNode]:
        return DispatcherNode.from_models(dispatcher_service.list_all(_db(info), skip=offset, limit=limit))

    @strawberry.field
    def dispatcher(self, info: Info, id: int) -> Optional[DispatcherNode]:
        return DispatcherNode.from_model(_get(dispatcher_service, info, id))

    @strawberry.field
    def units(self, info: Info, limit: int = 100, offset: int = 0) -> List[UnitNode]:
        return UnitNode.from_models(unit_service.list_all(_db(info), skip=offset, limit=limit))

    @strawberry.field
    def unit(self, info: Info, id: int) -> Optional[UnitNode]:
        return UnitNode.from_model(_get(unit_service, info, id))

    @strawberry.field
    def job_types(self, info: Info, company_id: Optional[int] = None) -> List[JobTypeNode]:
        return JobTypeNode.from_models(
            job_type_service.crud.get_by_company(_db(info), company_id=company_id)
        )

    @strawberry.field
    def job_type(self, info: Info, id: int) -> Optional[JobTypeNode]:
        return JobTypeNode.from_model(_get(job_type_service, info, id))

    @strawberry.field
    def jobs(
        self,
        info: Info,
        filter: Optional[JobFilter] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None
    ) -> List[JobNode]:
        filters = vars(filter) if filter else {}
        with api_errors():
            jobs = job_service.filter_jobs(_db(info), limit=limit, offset=offset, **filters)
        return JobNode.from_models(jobs)

    @strawberry.field
    def job(self, info: Info, id: int) -> Optional[JobNode]:
        return JobNode.from_model(_get(job_service, info, id))

    @strawberry.field
    def invoices(
        self,
        info: Info,
        dispatcher_id: Optional[int] = None,
        status: Optional[str] = None
    ) -> List[InvoiceNode]:
        with api_errors():
            invoices = invoice_service.find(_db(info), dispatcher_id=dispatcher_id, status=status)
        return InvoiceNode.from_models(invoices)

    @strawberry.field
    def invoice(self, info: Info, id: int) -> Optional[InvoiceNode]:
        return InvoiceNode.from_model(_get(invoice_service, info, id))

    @strawberry.field
    def dashboard_stats(
        self,
        info: Info,
        year: Optional[int] = None,
        month: Optional[int] = None
    ) -> DashboardStatsNode:
        with api_errors():
            stats = dashboard_service.get_stats(_db(info), year=year, month=month)
        return DashboardStatsNode(instance=stats)

    @strawberry.field
    def search_companies(self, info: Info, query: str, limit: int = 10) -> List[CompanyNode]:
        with api_errors():
            return CompanyNode.from_models(company_service.search(_db(info), query, limit))

    @strawberry.field
    def search_jobs(self, info: Info, query: str, limit: int = 10) -> List[JobNode]:
        with api_errors():
            return JobNode.from_models(job_service.search(_db(info), query, limit))


@strawberry.type
class Mutation:
    @strawberry.mutation
    def create_company(self, info: Info, input: CompanyInput) -> CompanyNode:
        return CompanyNode.from_model(_create(company_service, CompanyCreate, info, input))

    @strawberry.mutation
    def update_company(self, info: Info, id: int, input: CompanyInput) -> CompanyNode:
        return CompanyNode.from_model(_update(company_service, CompanyUpdate, info, id, input))

    @strawberry.mutation
    def delete_company(self, info: Info, id: int) -> bool:
        return _delete(company_service, info, id)

    @strawberry.mutation
    def create_driver(self, info: Info, input: DriverInput) -> DriverNode:
        return DriverNode.from_model(_create(driver_service, DriverCreate, info, input))

    @strawberry.mutation
    def update_driver(self, info: Info, id: int, input: DriverInput) -> DriverNode:
        return DriverNode.from_model(_update(driver_service, DriverUpdate, info, id, input))

    @strawberry.mutation
    def delete_driver(self, info: Info, id: int) -> bool:
        return _delete(driver_service, info, id)

    @strawberry.mutation
    def create_dispatcher(self, info: Info, input: DispatcherInput) -> DispatcherNode:
        return DispatcherNode.from_model(_create(dispatcher_service, DispatcherCreate, info, input))

    @strawberry.mutation
    def update_dispatcher(self, info: Info, id: int, input: DispatcherInput) -> DispatcherNode:
        return DispatcherNode.from_model(
            _update(dispatcher_service, DispatcherUpdate, info, id, input)
        )

    @strawberry.mutation
    def delete_dispatcher(self, info: Info, id: int) -> bool:
        return _delete(dispatcher_service, info, id)

    @strawberry.mutation
    def create_unit(self, info: Info, input: UnitInput) -> UnitNode:
        return UnitNode.from_model(_create(unit_service, UnitCreate, info, input))

    @strawberry.mutation
    def update_unit(self, info: Info, id: int, input: UnitInput) -> UnitNode:
        return UnitNode.from_model(_update(unit_service, UnitUpdate, info, id, input))

    @strawberry.mutation
    def delete_unit(self, info: Info, id: int) -> bool:
        return _delete(unit_service, info, id)

    @strawberry.mutation
    def create_job_type(self, info: Info, input: JobTypeInput) -> JobTypeNode:
        return JobTypeNode.from_model(_create(job_type_service, JobTypeCreate, info, input))

    @strawberry.mutation
    def update_job_type(self, info: Info, id: int, input: JobTypeInput) -> JobTypeNode:
        return JobTypeNode.from_model(_update(job_type_service, JobTypeUpdate, info, id, input))

    @strawberry.mutation
    def delete_job_type(self, info: Info, id: int) -> bool:
        return _delete(job_type_service, info, id)

    @strawberry.mutation
    def create_job(self, info: Info, input: JobInput) -> JobNode:
        return JobNode.from_model(_create(job_service, JobCreate, info, input))

    @strawberry.mutation
    def update_job(self, info: Info, id: int, input: JobInput) -> JobNode:
        return JobNode.from_model(_update(job_service, JobUpdate, info, id, input))

    @strawberry.mutation
    def delete_job(self, info: Info, id: int) -> bool:
        return _delete(job_service, info, id)

    @strawberry.mutation
    def update_invoice_status(self, info: Info, job_id: int, status: str) -> JobNode:
        try:
            invoice_status = InvoiceStatus(status)
        except ValueError as e:
            raise GraphQLError(f"Unknown invoice status {status}", extensions={"code": 400}) from e
        with api_errors():
            job = job_service.set_invoice_status(_db(info), job_id, invoice_status)
        return JobNode.from_model(job)

    @strawberry.mutation
    def create_invoice(self, info: Info, input: InvoiceInput) -> InvoiceNode:
        return InvoiceNode.from_model(_create(invoice_service, InvoiceCreate, info, input))

    @strawberry.mutation
    def delete_invoice(self, info: Info, id: int) -> bool:
        return _delete(invoice_service, info, id)


async def get_context(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user)
) -> dict:
    return {"db": db, "user": user}


schema = strawberry.Schema(query=Query, mutation=Mutation)

# The in-browser IDE is only served outside production
graphql_router = GraphQLRouter(
    schema,
    context_getter=get_context,
    graphql_ide=None if settings.is_production else "graphiql",
)
