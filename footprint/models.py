"""Core data models for the Digital Footprint settings core.

This module defines the persisted records (settings and user categories),
the export snapshot, and the result values that mutating operations hand
back to the caller. All models use Pydantic v2 for validation and
serialization.

Persisted records use camelCase field names so the stored document and the
export artifact stay readable by the browser extension. In Python the
attributes are snake_case; serialize with ``by_alias=True``.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from enum import Enum, IntEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# =============================================================================
# Storage Keys
# =============================================================================

SETTINGS_KEY = "settings"
USER_CATEGORIES_KEY = "userCategories"
EVENTS_KEY = "events"
CONTENT_ANALYSES_KEY = "contentAnalyses"


# =============================================================================
# Enums
# =============================================================================


class ScanInterval(IntEnum):
    """Scan intervals offered by the options page, in milliseconds.

    ``Settings.scan_interval`` is a plain integer: values outside this set
    are stored as given.
    """

    FIFTEEN_SECONDS = 15000
    THIRTY_SECONDS = 30000
    ONE_MINUTE = 60000
    FIVE_MINUTES = 300000


class Category(str, Enum):
    """Site categories offered by the options page.

    Category names in a ``CategoryMap`` are free-form strings; these are
    only the suggested ones.
    """

    PRODUCTIVITY = "productivity"
    SOCIAL = "social"
    ENTERTAINMENT = "entertainment"
    NEWS = "news"
    SHOPPING = "shopping"
    EDUCATION = "education"
    COMMUNICATION = "communication"
    DEVELOPMENT = "development"
    FINANCE = "finance"
    HEALTH = "health"
    OTHER = "other"


class ErrorKind(str, Enum):
    """Recoverable failure kinds reported through ``OperationResult``.

    Attributes:
        INVALID_INPUT: Blank URL or blank category given to add_domain.
        DUPLICATE_ENTRY: Domain already present in the target category.
    """

    INVALID_INPUT = "invalid_input"
    DUPLICATE_ENTRY = "duplicate_entry"


# =============================================================================
# Status Messages
# =============================================================================


class StatusMessage:
    """Human-readable status strings surfaced to the caller."""

    SETTINGS_SAVED = "Settings saved"
    SETTINGS_RESET = "Settings reset to defaults"
    INVALID_URL = "Please enter a valid URL"
    DUPLICATE_SITE = "Site already exists in this category"
    DATA_EXPORTED = "Data exported successfully"
    ALL_DATA_CLEARED = "All data cleared"
    CATEGORIES_CLEARED = "Custom categories cleared"
    INVALID_CATEGORY = "Please choose a category"
    CLEAR_CANCELLED = "Clear cancelled"

    @staticmethod
    def added(domain: str, category: str) -> str:
        return f"Added {domain} to {category} category"

    @staticmethod
    def removed(domain: str, category: str) -> str:
        return f"Removed {domain} from {category} category"


# =============================================================================
# Persisted Records
# =============================================================================


class Settings(BaseModel):
    """User-tunable configuration of the extension.

    Every field has a default, so validating a partial persisted document
    backfills whatever is missing. Keys this model does not know are kept
    as extra fields and written back unchanged.

    Attributes:
        content_scanning: Scan page content at all
        emotional_analysis: Run emotional analysis on scanned content
        productivity_tracking: Track time spent per category
        bias_detection: Run bias detection on scanned content
        exclude_list: Domains that are never scanned (duplicates tolerated)
        scan_interval: Milliseconds between scans
        onboarding_completed: Whether the onboarding flow was finished
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    content_scanning: bool = True
    emotional_analysis: bool = True
    productivity_tracking: bool = True
    bias_detection: bool = True
    exclude_list: list[str] = Field(default_factory=list)
    scan_interval: int = ScanInterval.THIRTY_SECONDS.value
    onboarding_completed: bool = False

    @classmethod
    def field_name_for(cls, key: str) -> str | None:
        """Map a camelCase alias or snake_case name to the attribute name."""
        if key in cls.model_fields:
            return key
        for name, info in cls.model_fields.items():
            if info.alias == key:
                return name
        return None

    def to_storage(self) -> dict[str, Any]:
        """Serialize with camelCase keys for persistence."""
        return self.model_dump(mode="json", by_alias=True)


CategoryMap = dict[str, list[str]]


# =============================================================================
# Export
# =============================================================================


def utc_timestamp(moment: datetime | None = None) -> str:
    """Format a moment as ISO-8601 UTC with millisecond precision and ``Z``."""
    moment = moment or datetime.now(timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ExportSnapshot(BaseModel):
    """Point-in-time aggregation of everything the extension stores.

    ``events`` and ``content_analyses`` belong to the analysis engines and
    are copied verbatim.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    events: list[Any] = Field(default_factory=list)
    content_analyses: list[Any] = Field(default_factory=list)
    settings: Settings = Field(default_factory=Settings)
    user_categories: CategoryMap = Field(default_factory=dict)
    export_date: str = Field(default_factory=utc_timestamp)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self) -> str:
        """Pretty-printed JSON document for the downloadable artifact."""
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

    @property
    def filename(self) -> str:
        """Artifact name, dated with the export day in UTC."""
        return f"digital-footprint-data-{self.export_date[:10]}.json"


# =============================================================================
# Operation Results
# =============================================================================


class OperationResult(BaseModel):
    """Outcome of a mutating operation.

    Attributes:
        ok: True if the operation took effect
        message: Status string for the caller to display
        error: Failure kind when ``ok`` is False because of bad input
        domain: Normalized domain the operation applied to, if any
        category: Category the operation applied to, if any
    """

    ok: bool
    message: str
    error: ErrorKind | None = None
    domain: str | None = None
    category: str | None = None

    @classmethod
    def success(cls, message: str, **kwargs: Any) -> "OperationResult":
        return cls(ok=True, message=message, **kwargs)

    @classmethod
    def failure(cls, error: ErrorKind | None, message: str, **kwargs: Any) -> "OperationResult":
        return cls(ok=False, error=error, message=message, **kwargs)
