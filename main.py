from fastapi import FastAPI, Depends, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException
from fiverivers.database import get_db
from fiverivers.dependencies import get_current_user
from fiverivers.routers import auth, companies, drivers, units, dispatchers, job_types, jobs, invoices
from fiverivers.graphql.schema import graphql_router
from fiverivers.core.config import settings
from fiverivers.core.logging_config import logger

# Base.metadata.create_all is not called; the schema is managed by Alembic

app = FastAPI(
    title="5 Rivers Trucking Back-Office API",
    version="1.0.0",
    redirect_slashes=False  # Disable automatic redirects to prevent POST data loss
)

# Configure CORS for the admin portal
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.info(f"Rejected request to {request.url.path}: {len(exc.errors())} validation errors")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request", "details": jsonable_encoder(exc.errors())},
    )


# Include routers; everything except login requires a bearer token
protected = [Depends(get_current_user)]

app.include_router(auth.router, prefix="/auth", tags=["Authentication"])
app.include_router(companies.router, prefix="/companies", tags=["Companies"], dependencies=protected)
app.include_router(drivers.router, prefix="/drivers", tags=["Drivers"], dependencies=protected)
app.include_router(units.router, prefix="/units", tags=["Units"], dependencies=protected)
app.include_router(dispatchers.router, prefix="/dispatchers", tags=["Dispatchers"], dependencies=protected)
app.include_router(job_types.router, prefix="/jobtypes", tags=["Job Types"], dependencies=protected)
app.include_router(jobs.router, prefix="/jobs", tags=["Jobs"], dependencies=protected)
app.include_router(invoices.router, prefix="/invoices", tags=["Invoices"], dependencies=protected)
app.include_router(graphql_router, prefix="/graphql", tags=["GraphQL"])


@app.get("/health")
async def health_check(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
        return {
            "status": "healthy",
            "database": "connected"
        }
    except Exception as e:
        logger.error(f"Health check failed: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service unhealthy"
        )
