from pydantic import BaseModel
from typing import Dict, Any


class StoredWebhookRecord(BaseModel):
    timestamp: str
    headers: Dict[str, str]
    payload: Any = None


class WebhookAck(BaseModel):
    success: bool = True
    message: str = "Webhook received and saved"
    filename: str
    timestamp: str


class HealthStatus(BaseModel):
    status: str = "healthy"
    timestamp: str


class ErrorResponse(BaseModel):
    error: str
