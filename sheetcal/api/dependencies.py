"""Request-scoped access to objects created once in the app lifespan."""

from fastapi import Request

from sheetcal.sheets.mapper import EventSheetMapper


def get_mapper(request: Request) -> EventSheetMapper:
    return request.app.state.mapper
