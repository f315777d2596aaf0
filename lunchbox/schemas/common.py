from typing import Any, Dict
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Error envelope produced by the global error handler"""
    success: bool = Field(False, description="Always false")
    error_code: str = Field(description="Stable error code")
    message: str = Field(description="Human readable message")
    details: Dict[str, Any] = Field(default_factory=dict, description="Extra context, e.g. field")

    model_config = {
        "json_schema_extra": {
            "example": {
                "success": False,
                "error_code": "SELECTION_LOCKED",
                "message": "Selection for 2024-03-15 is locked",
                "details": {"selection_id": 12, "date": "2024-03-15"}
            }
        }
    }


class HealthResponse(BaseModel):
    status: str
    version: str
    database: str
