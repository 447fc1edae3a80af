from fastapi import APIRouter
from pydantic import BaseModel

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str
    message: str


@router.get("/health", response_model=HealthResponse, status_code=200)
async def healthcheck():
    return {"status": "ok", "message": "Research Agent is running."}
