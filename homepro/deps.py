# homepro/deps.py
from __future__ import annotations

from fastapi import Request

from .notifications.base import EmailSender, PushSender
from .services.property_enrichment import PropertyLookupService
from .services.storage import UploadStorage

# Collaborators are built once in create_app() and hung on app.state;
# tests swap them through app.dependency_overrides.


def get_email_sender(request: Request) -> EmailSender:
    return request.app.state.email_sender


def get_push_sender(request: Request) -> PushSender:
    return request.app.state.push_sender


def get_upload_storage(request: Request) -> UploadStorage:
    return request.app.state.storage


def get_property_lookup(request: Request) -> PropertyLookupService:
    return request.app.state.property_lookup
