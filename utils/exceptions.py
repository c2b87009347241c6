"""
Domain exceptions for the IDP planning service.

Collaborator failures (ExternalServiceError, MalformedResponseError) are
recovered locally with deterministic fallback content. NotFoundError and
ValidationError reach the caller. ConflictError is recovered by re-reading
the row that won the race.
"""


class IDPError(Exception):
    """Base class for all domain errors."""


class ExternalServiceError(IDPError):
    """Text-generation collaborator unreachable, failing or timed out."""


class MalformedResponseError(IDPError):
    """Collaborator answered, but not with the JSON shape we asked for."""


class NotFoundError(IDPError):
    """Referenced skill, plan, IDP or appraisal source does not exist."""

    def __init__(self, entity: str, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: {entity_id}")


class ValidationError(IDPError, ValueError):
    """Missing or invalid fields on create/update/mark-as-read."""


class ConflictError(IDPError):
    """Concurrent write lost the race (duplicate insert or stale version)."""
