"""
RecordStore — Record Route Handlers
====================================

What:  The five REST operations on /api/records.
How:   Each handler resolves the RecordService from app state, calls one
       service operation and wraps the result in the success envelope.
       Failures propagate as RecordStoreError subclasses and are rendered by
       the global exception handlers in main.py.

Route Inventory:
    GET    /api/records          list every record
    POST   /api/records          create a record (any JSON object body)
    PUT    /api/records/{id}     shallow-update a record
    DELETE /api/records/{id}     delete a record
    DELETE /api/records          delete every record
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Request

from recordstore.schemas.envelope import (
    ErrorEnvelope,
    MessageEnvelope,
    RecordEnvelope,
    RecordListEnvelope,
)
from recordstore.services.record_service import RecordService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Records"])

_NOT_FOUND = {404: {"description": "Record not found", "model": ErrorEnvelope}}
_SERVER_ERROR = {500: {"description": "Persistence failure or unexpected error", "model": ErrorEnvelope}}


def get_record_service(request: Request) -> RecordService:
    """Dependency: the RecordService created by the application factory."""
    return request.app.state.record_service


@router.get(
    "/records",
    response_model=RecordListEnvelope,
    responses={**_SERVER_ERROR},
    summary="List all records",
)
async def list_records(
    service: RecordService = Depends(get_record_service),
) -> RecordListEnvelope:
    records = await service.list_all()
    return RecordListEnvelope(data=[record.to_document() for record in records])


@router.post(
    "/records",
    response_model=RecordEnvelope,
    responses={**_SERVER_ERROR},
    summary="Create a record",
    description=(
        "Stores any JSON object. `id` is optional and generated as "
        "`record_<epoch ms>` when omitted; `createdAt` is always set by the server."
    ),
)
async def create_record(
    fields: Dict[str, Any] = Body(...),
    service: RecordService = Depends(get_record_service),
) -> RecordEnvelope:
    record = await service.create(fields)
    return RecordEnvelope(data=record.to_document())


@router.put(
    "/records/{record_id}",
    response_model=RecordEnvelope,
    responses={**_NOT_FOUND, **_SERVER_ERROR},
    summary="Update a record",
    description=(
        "Shallow-merges the body over the stored record. The stored `id` always "
        "stays equal to the path parameter; `updatedAt` is set by the server."
    ),
)
async def update_record(
    record_id: str,
    fields: Optional[Dict[str, Any]] = Body(default=None),
    service: RecordService = Depends(get_record_service),
) -> RecordEnvelope:
    record = await service.update(record_id, fields or {})
    return RecordEnvelope(data=record.to_document())


@router.delete(
    "/records/{record_id}",
    response_model=MessageEnvelope,
    responses={**_NOT_FOUND, **_SERVER_ERROR},
    summary="Delete a record",
)
async def delete_record(
    record_id: str,
    service: RecordService = Depends(get_record_service),
) -> MessageEnvelope:
    await service.delete(record_id)
    return MessageEnvelope(message="Record deleted")


@router.delete(
    "/records",
    response_model=MessageEnvelope,
    responses={**_SERVER_ERROR},
    summary="Delete all records",
)
async def delete_all_records(
    service: RecordService = Depends(get_record_service),
) -> MessageEnvelope:
    await service.delete_all()
    logger.warning("Collection reset through DELETE /api/records")
    return MessageEnvelope(message="All records deleted")
