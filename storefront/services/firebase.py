# storefront/services/firebase.py
from __future__ import annotations

import os
from contextlib import contextmanager
from functools import lru_cache

import firebase_admin
from firebase_admin import credentials, firestore
from firebase_admin import exceptions as firebase_exceptions
from google.api_core import exceptions as google_exceptions

from ..errors import SubmissionError
from ..logging_config import get_logger
from ..settings import settings

log = get_logger(__name__)


@lru_cache
def ensure_app() -> firebase_admin.App:
    """
    Return the default Firebase app, initializing it exactly once.

    - Safe to call many times (and from many threads).
    - Uses GOOGLE_APPLICATION_CREDENTIALS if present, or ADC otherwise.
    """
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass

    sa_path = os.environ.get("GOOGLE_APPLICATION_CREDENTIALS")
    options = {"projectId": settings.firebase_project_id}
    try:
        if sa_path and os.path.isfile(sa_path):
            return firebase_admin.initialize_app(credentials.Certificate(sa_path), options)
        return firebase_admin.initialize_app(options=options)
    except ValueError:
        # If another request initialized between our check and this call,
        # just use the app that won.
        return firebase_admin.get_app()


@lru_cache
def ensure_firestore() -> firestore.Client:
    """Return a Firestore client bound to the default app."""
    return firestore.client(app=ensure_app())


@contextmanager
def store_call(what: str):
    """
    Turn Firestore / Firebase errors raised inside the block into SubmissionError.

    The original message is kept so the caller can show it verbatim.
    """
    try:
        yield
    except (google_exceptions.GoogleAPICallError, firebase_exceptions.FirebaseError) as e:
        log.error(f"{what} failed: {e}")
        raise SubmissionError(f"{what} failed: {e}") from e
