from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

from storefront.config import get_settings
from storefront.routers import blog, catalog, checkout, products, stats

settings = get_settings()

logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(title="Storefront API")


@app.on_event("startup")
def on_startup():
    # Ensure all DB tables exist after all models are imported
    from storefront.models.database import Base, engine  # Base/engine single source
    import storefront.models.product  # register Category/Product models
    import storefront.models.review  # register Review model
    import storefront.models.blog  # register BlogPost/Tag models
    try:
        Base.metadata.create_all(bind=engine)
    except Exception as e:
        logger.error(f"Startup table creation failed: {e}")


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info("%s %s", request.method, request.url.path)
    return await call_next(request)


# Every error leaves the API as {"error": "..."}
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    details = [{"loc": list(e.get("loc", ())), "msg": e.get("msg")} for e in exc.errors()]
    return JSONResponse(status_code=422, content={"error": "Invalid request", "details": details})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    content = {"error": "Internal server error"}
    if settings.ENVIRONMENT == "development":
        content["message"] = str(exc)
    return JSONResponse(status_code=500, content=content)


# CORS configuration for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(products.router, prefix="/api/products", tags=["products"])
app.include_router(catalog.router, prefix="/api", tags=["catalog"])
app.include_router(blog.router, prefix="/api/blogposts", tags=["blog"])
app.include_router(stats.router, prefix="/api", tags=["stats"])
app.include_router(checkout.router, prefix="/api/checkout", tags=["checkout"])


# --- Entry point for local runs ---
if __name__ == "__main__":
    import uvicorn, os
    port = int(os.environ.get("PORT", 8000))
    uvicorn.run("storefront.main:app", host="0.0.0.0", port=port, reload=False)
