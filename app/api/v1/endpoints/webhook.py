import json
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool

from app.core.clock import isoformat_ms, utc_now
from app.core.config import Settings, get_settings
from app.core.errors import MalformedPayload, PayloadTooLarge, StorageWriteError
from app.core.security import verify_token
from app.core.storage import RecordWriter
from app.schemas.payload import ErrorResponse, StoredWebhookRecord, WebhookAck

logger = logging.getLogger(__name__)

router = APIRouter()


async def read_body(request: Request, limit: int) -> bytes:
    declared = request.headers.get("content-length")
    if declared is not None and declared.isdigit() and int(declared) > limit:
        raise PayloadTooLarge()

    chunks = []
    size = 0
    async for chunk in request.stream():
        size += len(chunk)
        if size > limit:
            raise PayloadTooLarge()
        chunks.append(chunk)
    return b"".join(chunks)


def reject_constant(name: str):
    """NaN and Infinity are accepted by json.loads but are not JSON."""
    raise MalformedPayload()


def parse_payload(body: bytes) -> Any:
    if not body.strip():
        raise MalformedPayload()
    try:
        return json.loads(body, parse_constant=reject_constant)
    except (ValueError, RecursionError) as e:
        raise MalformedPayload() from e


def collect_headers(request: Request) -> Dict[str, str]:
    """Header names lower-cased; repeated headers joined with ``", "``."""
    headers: Dict[str, str] = {}
    for name, value in request.headers.items():
        if name in headers:
            headers[name] = f"{headers[name]}, {value}"
        else:
            headers[name] = value
    return headers


@router.post(
    "/webhook",
    response_model=WebhookAck,
    dependencies=[Depends(verify_token)],
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        413: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def receive_webhook(
    request: Request,
    settings: Settings = Depends(get_settings),
):
    body = await read_body(request, settings.MAX_BODY_BYTES)
    payload = parse_payload(body)

    received_at = utc_now()
    timestamp = isoformat_ms(received_at)
    record = StoredWebhookRecord(
        timestamp=timestamp,
        headers=collect_headers(request),
        payload=payload,
    )

    writer = RecordWriter(settings.DATA_DIR)
    try:
        filename = await run_in_threadpool(writer.write, record, received_at)
    except StorageWriteError as e:
        logger.error("Error saving webhook data to %s: %s", e.filename, e.cause)
        raise

    logger.info("Webhook received and saved to: %s", filename)

    return WebhookAck(filename=filename, timestamp=timestamp)
