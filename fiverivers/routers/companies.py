from typing import Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from fiverivers.database import get_db
from fiverivers.schemas.common import MessageResponse, Page
from fiverivers.schemas.company import CompanyCreate, CompanyUpdate, CompanyResponse
from fiverivers.services.company import company_service
from fiverivers.utils.pagination import PageParams, page_params
from fiverivers.core.logging_config import logger

router = APIRouter()


@router.get("", response_model=Page[CompanyResponse])
def list_companies(
    search: Optional[str] = None,
    params: PageParams = Depends(page_params),
    db: Session = Depends(get_db)
):
    """
    Retrieve one page of companies, ordered by name.

    Args:
        search: Matches name, description, email or phone
        params: ``page`` and ``pageSize`` query parameters

    Returns:
        List envelope of companies with their job types
    """
    return company_service.list_page(db=db, params=params, search=search)


@router.get("/{company_id}", response_model=CompanyResponse)
def get_company(company_id: int, db: Session = Depends(get_db)):
    """
    Retrieve a specific company by ID.

    Raises:
        HTTPException 404: If company not found
    """
    return company_service.get(db=db, id=company_id)


@router.post("", response_model=CompanyResponse, status_code=status.HTTP_201_CREATED)
def create_company(company_data: CompanyCreate, db: Session = Depends(get_db)):
    """
    Create a new company.
    """
    try:
        logger.info(f"Creating company: name={company_data.name}")
        result = company_service.create(db=db, obj_in=company_data)
        logger.info(f"Company created successfully: id={result.id}")
        return result
    except Exception as e:
        logger.error(f"Error creating company: {type(e).__name__}: {str(e)}")
        raise


@router.put("/{company_id}", response_model=CompanyResponse)
def update_company(company_id: int, company_data: CompanyUpdate, db: Session = Depends(get_db)):
    """
    Update an existing company. Only the fields sent are changed.

    Raises:
        HTTPException 404: If company not found
    """
    logger.info(f"Updating company: id={company_id}")
    return company_service.update(db=db, id=company_id, obj_in=company_data)


@router.delete("/{company_id}", response_model=MessageResponse)
def delete_company(company_id: int, db: Session = Depends(get_db)):
    """
    Delete a company.

    Raises:
        HTTPException 404: If company not found
        HTTPException 400: If job types still belong to the company
    """
    logger.info(f"Deleting company: id={company_id}")
    company_service.delete(db=db, id=company_id)
    return {"message": "Company deleted"}
