from datetime import datetime

from fastapi import APIRouter
from pydantic import BaseModel
from sqlalchemy.engine import make_url

from ..config import settings

router = APIRouter(tags=["status"])


class HealthResponse(BaseModel):
    status: str
    time: str
    environment: str
    database: str
    apiKey: str


@router.get("/health", response_model=HealthResponse)
def health():
    # report only the backend kind, never credentials
    return HealthResponse(
        status="ok",
        time=datetime.utcnow().isoformat() + "Z",
        environment=settings.environment,
        database=make_url(settings.database_url).get_backend_name(),
        apiKey="present" if settings.x_api_key else "not set",
    )
