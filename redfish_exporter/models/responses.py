from typing import Optional
from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = Field(..., description="Exporter process status")
    version: str = Field(..., description="Exporter version")
    target: str = Field(..., description="Default Redfish target")
    up: int = Field(..., description="1 if the default target session was opened at startup")
    error: Optional[str] = Field(None, description="Bootstrap error for the default target")
