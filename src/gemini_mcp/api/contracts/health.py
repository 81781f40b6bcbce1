"""Health check response model"""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Process liveness; says nothing about upstream availability"""

    status: str
    service: str
    version: str
