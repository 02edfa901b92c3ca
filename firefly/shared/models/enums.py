"""
Enums used across the application.
"""

from enum import Enum


class UserRole(str, Enum):
    """Role supplied by the identity provider with every request."""

    ADMIN = "ADMIN"
    VOLUNTEER = "VOLUNTEER"
    MEMBER = "MEMBER"


class ContentType(str, Enum):
    """
    Discriminator of the unified content table.

    Fixed at creation. NOTE rows carry the assignment workflow,
    RESOURCE rows carry curation and ratings.
    """

    NOTE = "NOTE"
    RESOURCE = "RESOURCE"


class NoteType(str, Enum):
    """Kind of note."""

    TEXT = "TEXT"
    CHECKLIST = "CHECKLIST"
    JOURNAL = "JOURNAL"
    MEETING = "MEETING"
    CARE_PLAN = "CARE_PLAN"
    RESOURCE = "RESOURCE"
    PERSONAL = "PERSONAL"


class ResourceType(str, Enum):
    """Kind of resource in the library."""

    ARTICLE = "ARTICLE"
    VIDEO = "VIDEO"
    AUDIO = "AUDIO"
    DOCUMENT = "DOCUMENT"
    LINK = "LINK"
    IMAGE = "IMAGE"
    TOOL = "TOOL"
    CONTACT = "CONTACT"
    SERVICE = "SERVICE"


class ResourceStatus(str, Enum):
    """Curation lifecycle of a resource."""

    DRAFT = "DRAFT"
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    FEATURED = "FEATURED"
    REJECTED = "REJECTED"


class Visibility(str, Enum):
    """
    Read-access tier of a content record.

    PRIVATE: creator (and admins) only
    FAMILY:  members of the content's family
    SHARED:  users holding an explicit share
    PUBLIC:  everyone
    """

    PRIVATE = "PRIVATE"
    FAMILY = "FAMILY"
    SHARED = "SHARED"
    PUBLIC = "PUBLIC"


class AssignmentStatus(str, Enum):
    """Task lifecycle. COMPLETED and CANCELLED are terminal."""

    ASSIGNED = "ASSIGNED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class AssignmentPriority(str, Enum):
    """Task priority, declared from lowest to highest."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"


class SortOrder(str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


class ContentSortField(str, Enum):
    """Columns content listings may be sorted by."""

    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"
    TITLE = "title"
    VIEW_COUNT = "view_count"
    RATING = "rating"
