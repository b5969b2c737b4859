from __future__ import annotations
from fastapi import Request
from commissiestrijd.config import settings
from commissiestrijd.services.clock import Clock
from commissiestrijd.services.storage import ImageStore, build_image_store

def get_clock(request: Request) -> Clock:
    clock = getattr(request.app.state, "clock", None)
    if clock is None:
        clock = request.app.state.clock = Clock(settings.timezone)
    return clock

def get_image_store(request: Request) -> ImageStore:
    store = getattr(request.app.state, "image_store", None)
    if store is None:
        store = request.app.state.image_store = build_image_store(settings)
    return store
