from typing import List, Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from fiverivers.database import get_db
from fiverivers.schemas.common import MessageResponse, Page
from fiverivers.schemas.driver import (
    DriverCreate,
    DriverUpdate,
    DriverResponse,
    DriverListItem,
    DriverRateCreate,
    DriverRateResponse,
)
from fiverivers.services.driver import driver_service
from fiverivers.utils.pagination import PageParams, page_params
from fiverivers.core.logging_config import logger

router = APIRouter()


@router.get("", response_model=Page[DriverListItem])
def list_drivers(
    search: Optional[str] = None,
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db)
):
    """
    Retrieve one page of drivers, ordered by name.

    Each row carries ``activeJobsCount``, the number of the driver's jobs
    that have not been invoiced yet.

    Args:
        search: Matches name, email or phone
        params: ``page`` and ``pageSize`` query parameters
    """
    return driver_service.list_page(db=db, params=params, search=search)


@router.get("/{driver_id}", response_model=DriverResponse)
def get_driver(driver_id: int, db: Session = Depends(get_db)):
    """
    Retrieve a specific driver by ID.

    Raises:
        HTTPException 404: If driver not found
    """
    return driver_service.get(db=db, id=driver_id)


@router.post("", response_model=DriverResponse, status_code=status.HTTP_201_CREATED)
def create_driver(driver_data: DriverCreate, db: Session = Depends(get_db)):
    try:
        logger.info(f"Creating driver: name={driver_data.name}")
        result = driver_service.create(db=db, obj_in=driver_data)
        logger.info(f"Driver created successfully: id={result.id}")
        return result
    except Exception as e:
        logger.error(f"Error creating driver: {type(e).__name__}: {str(e)}")
        raise


@router.put("/{driver_id}", response_model=DriverResponse)
def update_driver(driver_id: int, driver_data: DriverUpdate, db: Session = Depends(get_db)):
    logger.info(f"Updating driver: id={driver_id}")
    return driver_service.update(db=db, id=driver_id, obj_in=driver_data)


@router.delete("/{driver_id}", response_model=MessageResponse)
def delete_driver(driver_id: int, db: Session = Depends(get_db)):
    """
    Delete a driver. Drivers with jobs cannot be deleted.

    Raises:
        HTTPException 404: If driver not found
        HTTPException 400: If jobs still reference the driver
    """
    logger.info(f"Deleting driver: id={driver_id}")
    driver_service.delete(db=db, id=driver_id)
    return {"message": "Driver deleted"}


@router.get("/{driver_id}/rates", response_model=List[DriverRateResponse])
def list_driver_rates(driver_id: int, db: Session = Depends(get_db)):
    """
    Retrieve the per-job-type pay rates of a driver.
    """
    return driver_service.get_rates(db=db, driver_id=driver_id)


@router.post(
    "/{driver_id}/rates",
    response_model=DriverRateResponse,
    status_code=status.HTTP_201_CREATED
)
def create_driver_rate(
    driver_id: int,
    rate_data: DriverRateCreate,
    db: Session = Depends(get_db)
):
    logger.info(f"Adding rate for driver {driver_id}: job_type_id={rate_data.job_type_id}")
    return driver_service.add_rate(db=db, driver_id=driver_id, rate_in=rate_data)


@router.delete("/{driver_id}/rates/{rate_id}", response_model=MessageResponse)
def delete_driver_rate(driver_id: int, rate_id: int, db: Session = Depends(get_db)):
    logger.info(f"Deleting rate {rate_id} of driver {driver_id}")
    driver_service.delete_rate(db=db, driver_id=driver_id, rate_id=rate_id)
    return {"message": "Driver rate deleted"}
