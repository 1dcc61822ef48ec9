from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from app.core.config import settings
from app.core.exceptions import DataIntegrityError, EmptyDoctorSetError, InvalidRangeError, UpstreamFetchError
from app.core.logger import logger
from app.core.redis import redis_client
from app.middleware.log_middleware import LogMiddleware

@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await redis_client.close()
    logger.info("Redis connection closed")

app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    lifespan=lifespan
)

from fastapi.middleware.cors import CORSMiddleware

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(LogMiddleware)

@app.exception_handler(InvalidRangeError)
async def invalid_range_handler(request: Request, exc: InvalidRangeError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})

@app.exception_handler(EmptyDoctorSetError)
async def empty_doctor_set_handler(request: Request, exc: EmptyDoctorSetError):
    return JSONResponse(status_code=404, content={"detail": "No doctors found for this query"})

@app.exception_handler(DataIntegrityError)
async def data_integrity_handler(request: Request, exc: DataIntegrityError):
    logger.error(f"Data integrity error on {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"detail": str(exc)})

@app.exception_handler(UpstreamFetchError)
async def upstream_fetch_handler(request: Request, exc: UpstreamFetchError):
    logger.error(f"Upstream fetch error on {request.url.path}: {exc}")
    return JSONResponse(status_code=503, content={"detail": f"Could not load {exc.source}"})

@app.get("/")
async def root():
    return {"message": "Welcome to CareCalendar API"}

from app.api.api import api_router
app.include_router(api_router, prefix=settings.API_V1_STR)
