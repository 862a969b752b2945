"""
Event Route - Weekly schedule CRUD

Provides the /event resource consumed by the calendar front end:
- GET    list every event in sheet order
- POST   add an event (the server generates its id)
- PUT    overwrite an existing event by id
- DELETE clear an event's row (/event/{id})

Storage failures are logged with their cause and answered with a generic
500 message.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from sheetcal.api.dependencies import get_mapper
from sheetcal.api.models import EventPayload, EventResponse, MessageResponse
from sheetcal.sheets.errors import BackendFailure, NotFound, ValidationError
from sheetcal.sheets.mapper import EventSheetMapper

logger = logging.getLogger(__name__)


router = APIRouter()


@router.get("", response_model=list[EventResponse], response_model_exclude_none=True)
async def list_events(mapper: EventSheetMapper = Depends(get_mapper)):
    """
    List all events.

    Cleared rows between events come back as empty objects so that list
    position keeps matching sheet row order.
    """
    try:
        events = await mapper.list_events()
    except NotFound as e:
        raise HTTPException(status_code=404, detail=e.message)
    except BackendFailure as e:
        logger.error(f"GET /event error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Failed to fetch {mapper.sheet_name}")

    return [event.to_dict() for event in events]


@router.post("", response_model=MessageResponse)
async def create_event(payload: EventPayload, mapper: EventSheetMapper = Depends(get_mapper)):
    """Add an event. All fields except id are required."""
    try:
        created = await mapper.create_event(payload.to_event())
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except BackendFailure as e:
        logger.error(f"POST /event error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to add event")

    logger.debug(f"Event {created.id} added")
    return MessageResponse(message="Event added successfully")


@router.put("", response_model=MessageResponse)
async def update_event(payload: EventPayload, mapper: EventSheetMapper = Depends(get_mapper)):
    """Overwrite an event. All eight fields are required."""
    try:
        await mapper.update_event(payload.to_event())
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=e.message)
    except BackendFailure as e:
        logger.error(f"PUT /event error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update event")

    return MessageResponse(message="Event updated successfully")


@router.delete("/{event_path:path}", response_model=MessageResponse)
async def delete_event(event_path: str, mapper: EventSheetMapper = Depends(get_mapper)):
    """
    Delete an event by id.

    The id is the last path segment; the row is blanked rather than removed.
    """
    event_id = event_path.rsplit("/", 1)[-1]
    try:
        result = await mapper.delete_event(event_id)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=e.message)
    except BackendFailure as e:
        logger.error(f"DELETE /event error: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to delete event")

    logger.debug(f"Row {result.row_number} cleared, row kept: {result.row_kept}")
    return MessageResponse(message="Event deleted successfully")
