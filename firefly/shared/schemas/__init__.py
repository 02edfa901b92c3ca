"""
Pydantic Schemas

Request and response models for the repositories and the API.

Schema Categories:
==================
- common: Base schema, error and health responses
- content: Unified content inputs, filters and responses
- note: Legacy note shapes
- resource: Legacy resource shapes

Usage:
======
    from firefly.shared.schemas.content import CreateContentInput, ContentResponse
    from firefly.shared.schemas.common import ErrorResponse
"""

from firefly.shared.schemas.common import (
    BaseSchema,
    MessageResponse,
    ErrorDetail,
    ErrorResponse,
    HealthResponse,
    loaded_fields,
)
from firefly.shared.schemas.content import (
    CreateContentInput,
    UpdateContentInput,
    AssignmentInput,
    AssignmentStatusUpdate,
    AssignmentUpdate,
    SharePermissions,
    ShareContentInput,
    RateContentInput,
    AttachDocumentInput,
    ContentFilters,
    ContentOptions,
    ContentResponse,
    ContentSummary,
    AssignmentResponse,
    RatingResponse,
    ShareResponse,
    ContentDocumentResponse,
    PaginatedContentResponse,
)
from firefly.shared.schemas.note import (
    NoteFilters,
    CreateNoteInput,
    UpdateNoteInput,
    LegacyNote,
    PaginatedNotes,
)
from firefly.shared.schemas.resource import (
    ResourceFilters,
    CreateResourceInput,
    UpdateResourceInput,
    TrackShareInput,
    LegacyResource,
    PaginatedResources,
    ResourceStatistics,
)

__all__ = [
    # Common
    "BaseSchema",
    "MessageResponse",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
    "loaded_fields",
    # Content
    "CreateContentInput",
    "UpdateContentInput",
    "AssignmentInput",
    "AssignmentStatusUpdate",
    "AssignmentUpdate",
    "SharePermissions",
    "ShareContentInput",
    "RateContentInput",
    "AttachDocumentInput",
    "ContentFilters",
    "ContentOptions",
    "ContentResponse",
    "ContentSummary",
    "AssignmentResponse",
    "RatingResponse",
    "ShareResponse",
    "ContentDocumentResponse",
    "PaginatedContentResponse",
    # Legacy notes
    "NoteFilters",
    "CreateNoteInput",
    "UpdateNoteInput",
    "LegacyNote",
    "PaginatedNotes",
    # Legacy resources
    "ResourceFilters",
    "CreateResourceInput",
    "UpdateResourceInput",
    "TrackShareInput",
    "LegacyResource",
    "PaginatedResources",
    "ResourceStatistics",
]
