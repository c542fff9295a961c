from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from fiverivers.database import get_db
from fiverivers.schemas.common import MessageResponse, Page
from fiverivers.schemas.job_type import JobTypeCreate, JobTypeUpdate, JobTypeResponse
from fiverivers.services.job_type import job_type_service
from fiverivers.utils.pagination import PageParams, page_params
from fiverivers.core.logging_config import logger

router = APIRouter()


@router.get("", response_model=Page[JobTypeResponse])
def list_job_types(
    search: Optional[str] = None,
    company_id: Optional[int] = Query(None, alias="companyId"),
    dispatch_type: Optional[str] = Query(None, alias="dispatchType"),
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db)
):
    """
    Retrieve one page of job types, ordered by title.

    Args:
        search: Matches title, start location or end location
        company_id: Only job types of this company
        dispatch_type: Hourly, Load, Tonnage or Fixed (case-insensitive)
        params: ``page`` and ``pageSize`` query parameters
    """
    return job_type_service.list_page(
        db=db,
        params=params,
        search=search,
        filters={"company_id": company_id, "dispatch_type": dispatch_type}
    )


@router.get("/{job_type_id}", response_model=JobTypeResponse)
def get_job_type(job_type_id: int, db: Session = Depends(get_db)):
    return job_type_service.get(db=db, id=job_type_id)


@router.post("", response_model=JobTypeResponse, status_code=status.HTTP_201_CREATED)
def create_job_type(job_type_data: JobTypeCreate, db: Session = Depends(get_db)):
    """
    Create a new job type.

    Raises:
        HTTPException 400: If the company does not exist
    """
    try:
        logger.info(f"Creating job type: title={job_type_data.title}, company_id={job_type_data.company_id}")
        result = job_type_service.create(db=db, obj_in=job_type_data)
        logger.info(f"Job type created successfully: id={result.id}")
        return result
    except Exception as e:
        logger.error(f"Error creating job type: {type(e).__name__}: {str(e)}")
        raise


@router.put("/{job_type_id}", response_model=JobTypeResponse)
def update_job_type(job_type_id: int, job_type_data: JobTypeUpdate, db: Session = Depends(get_db)):
    logger.info(f"Updating job type: id={job_type_id}")
    return job_type_service.update(db=db, id=job_type_id, obj_in=job_type_data)


@router.delete("/{job_type_id}", response_model=MessageResponse)
def delete_job_type(job_type_id: int, db: Session = Depends(get_db)):
    logger.info(f"Deleting job type: id={job_type_id}")
    job_type_service.delete(db=db, id=job_type_id)
    return {"message": "Job type deleted"}
