from fastapi import APIRouter

from chemlabel.api.v1.endpoints import batch, extraction, health, validation

api_router = APIRouter()

api_router.include_router(health.router, prefix="/sds", tags=["Health"])
api_router.include_router(extraction.router, prefix="/sds", tags=["Extraction"])
api_router.include_router(validation.router, prefix="/sds", tags=["Validation"])
api_router.include_router(batch.router, prefix="/sds", tags=["Batch"])
