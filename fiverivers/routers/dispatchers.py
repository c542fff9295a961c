from typing import Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from fiverivers.database import get_db
from fiverivers.schemas.common import MessageResponse, Page
from fiverivers.schemas.dispatcher import (
    DispatcherCreate,
    DispatcherUpdate,
    DispatcherResponse,
    DispatcherListItem,
)
from fiverivers.services.dispatcher import dispatcher_service
from fiverivers.utils.pagination import PageParams, page_params
from fiverivers.core.logging_config import logger

router = APIRouter()


@router.get("", response_model=Page[DispatcherListItem])
def list_dispatchers(
    search: Optional[str] = None,
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db)
):
    """
    Retrieve one page of dispatchers with their job and invoice counts.

    Args:
        search: Matches name or email
        params: ``page`` and ``pageSize`` query parameters
    """
    return dispatcher_service.list_page(db=db, params=params, search=search)


@router.get("/{dispatcher_id}", response_model=DispatcherResponse)
def get_dispatcher(dispatcher_id: int, db: Session = Depends(get_db)):
    return dispatcher_service.get(db=db, id=dispatcher_id)


@router.post("", response_model=DispatcherResponse, status_code=status.HTTP_201_CREATED)
def create_dispatcher(dispatcher_data: DispatcherCreate, db: Session = Depends(get_db)):
    try:
        logger.info(f"Creating dispatcher: name={dispatcher_data.name}")
        result = dispatcher_service.create(db=db, obj_in=dispatcher_data)
        logger.info(f"Dispatcher created successfully: id={result.id}")
        return result
    except Exception as e:
        logger.error(f"Error creating dispatcher: {type(e).__name__}: {str(e)}")
        raise


@router.put("/{dispatcher_id}", response_model=DispatcherResponse)
def update_dispatcher(
    dispatcher_id: int,
    dispatcher_data: DispatcherUpdate,
    db: Session = Depends(get_db)
):
    logger.info(f"Updating dispatcher: id={dispatcher_id}")
    return dispatcher_service.update(db=db, id=dispatcher_id, obj_in=dispatcher_data)


@router.delete("/{dispatcher_id}", response_model=MessageResponse)
def delete_dispatcher(dispatcher_id: int, db: Session = Depends(get_db)):
    logger.info(f"Deleting dispatcher: id={dispatcher_id}")
    dispatcher_service.delete(db=db, id=dispatcher_id)
    return {"message": "Dispatcher deleted"}
