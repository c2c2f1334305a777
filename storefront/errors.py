"""Error types shared by the services and mapped to HTTP codes by the routes."""
from __future__ import annotations


class StorefrontError(Exception):
    """Base class for storefront failures."""


class ValidationError(StorefrontError, ValueError):
    """Input rejected before it reaches the store (quantity, rating, dates...)."""


class SubmissionError(StorefrontError):
    """A call to Firestore / Firebase Auth failed; the message is shown to the user."""


class StatusConflict(ValidationError):
    """The record is not in a state that allows the requested change."""
