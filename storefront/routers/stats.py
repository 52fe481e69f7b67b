import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.orm import Session

from storefront.config import get_settings
from storefront.models.database import get_db
from storefront.models.product import Category, Product
from storefront.models.review import Review
from storefront.schemas.stats import HealthOut, StatsOut

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/stats", response_model=StatsOut)
def get_stats(db: Session = Depends(get_db)):
    return StatsOut(
        products=db.query(Product).count(),
        categories=db.query(Category).count(),
        reviews=db.query(Review).count(),
    )


@router.get("/health", response_model=HealthOut)
def health(db: Session = Depends(get_db)):
    environment = get_settings().ENVIRONMENT
    try:
        server_time = db.execute(text("SELECT CURRENT_TIMESTAMP")).scalar()
    except Exception as e:
        logger.error("Health check could not reach the database: %s", e)
        return JSONResponse(
            status_code=500,
            content={"status": "ERROR", "database": "Disconnected", "error": str(e)},
        )
    return HealthOut(
        status="OK",
        database="Connected",
        server_time=str(server_time),
        environment=environment,
    )
