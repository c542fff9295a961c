from typing import Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from fiverivers.database import get_db
from fiverivers.schemas.common import MessageResponse, Page
from fiverivers.schemas.unit import UnitCreate, UnitUpdate, UnitResponse, UnitListItem
from fiverivers.services.unit import unit_service
from fiverivers.utils.pagination import PageParams, page_params
from fiverivers.core.logging_config import logger

router = APIRouter()


@router.get("", response_model=Page[UnitListItem])
def list_units(
    search: Optional[str] = None,
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db)
):
    """
    Retrieve one page of units (trucks) with their job counts.

    Args:
        search: Matches name, plate number or VIN
        params: ``page`` and ``pageSize`` query parameters
    """
    return unit_service.list_page(db=db, params=params, search=search)


@router.get("/{unit_id}", response_model=UnitResponse)
def get_unit(unit_id: int, db: Session = Depends(get_db)):
    return unit_service.get(db=db, id=unit_id)


@router.post("", response_model=UnitResponse, status_code=status.HTTP_201_CREATED)
def create_unit(unit_data: UnitCreate, db: Session = Depends(get_db)):
    try:
        logger.info(f"Creating unit: name={unit_data.name}")
        result = unit_service.create(db=db, obj_in=unit_data)
        logger.info(f"Unit created successfully: id={result.id}")
        return result
    except Exception as e:
        logger.error(f"Error creating unit: {type(e).__name__}: {str(e)}")
        raise


@router.put("/{unit_id}", response_model=UnitResponse)
def update_unit(unit_id: int, unit_data: UnitUpdate, db: Session = Depends(get_db)):
    logger.info(f"Updating unit: id={unit_id}")
    return unit_service.update(db=db, id=unit_id, obj_in=unit_data)


@router.delete("/{unit_id}", response_model=MessageResponse)
def delete_unit(unit_id: int, db: Session = Depends(get_db)):
    """
    Delete a unit. Units that jobs still reference cannot be deleted.
    """
    logger.info(f"Deleting unit: id={unit_id}")
    unit_service.delete(db=db, id=unit_id)
    return {"message": "Unit deleted"}
