"""
Job record schema.

Defines the closed status enumeration, the pydantic models that validate
create/update payloads, and the helpers that translate between API field
names (camelCase JSON) and stored MongoDB documents.

Stored document layout:
    {
        "_id": ObjectId,
        "companyName": str,
        "role": str,
        "dateApplied": datetime (midnight UTC),
        "status": "Applied" | "Interviewing" | "Offer Received" | "Rejected",
        "createdAt": datetime,
        "updatedAt": datetime,
    }
"""

from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic import ValidationError as PydanticValidationError

from .errors import BadRequestError, ValidationError


class JobStatus(str, Enum):
    """Lifecycle stage of a job application. One board column per member."""
    APPLIED = "Applied"
    INTERVIEWING = "Interviewing"
    OFFER_RECEIVED = "Offer Received"
    REJECTED = "Rejected"


# Fixed column order on the board
BOARD_COLUMNS: Tuple[JobStatus, ...] = tuple(JobStatus)
STATUS_VALUES: List[str] = [status.value for status in JobStatus]

# API field name -> stored document key
_FIELD_KEYS = {
    "company_name": "companyName",
    "role": "role",
    "date_applied": "dateApplied",
    "status": "status",
}


def _coerce_date(value: Any) -> Any:
    """Accept `YYYY-MM-DD`, an ISO datetime string, or a datetime."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and "T" in value:
        try:
            return datetime.fromisoformat(value.strip()).date()
        except ValueError:
            # Let pydantic report the malformed value
            return value
    return value


def _require_text(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be empty")
    return value


class JobCreate(BaseModel):
    """Payload for creating a job record."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    company_name: str = Field(..., alias="companyName", description="Company applied to")
    role: str = Field(..., description="Position title")
    date_applied: date = Field(..., alias="dateApplied", description="Calendar date of the application")
    status: JobStatus = Field(default=JobStatus.APPLIED, description="Board column")

    @field_validator("company_name", "role")
    @classmethod
    def text_not_blank(cls, v: str) -> str:
        return _require_text(v)

    @field_validator("date_applied", mode="before")
    @classmethod
    def parse_date(cls, v: Any) -> Any:
        return _coerce_date(v)

    @field_validator("status", mode="before")
    @classmethod
    def default_status(cls, v: Any) -> Any:
        """Missing, null and empty status all mean "Applied"."""
        if v is None or v == "":
            return JobStatus.APPLIED
        return v

    def to_document(self) -> Dict[str, Any]:
        """Convert to a MongoDB document (without _id and timestamps)."""
        return {
            "companyName": self.company_name,
            "role": self.role,
            "dateApplied": date_to_datetime(self.date_applied),
            "status": self.status.value,
        }


class JobUpdate(BaseModel):
    """
    Payload for a partial or full update.

    Only fields present in the input are applied. A field that is present
    must satisfy the same rules as on create, so `null` is rejected.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    company_name: Optional[str] = Field(default=None, alias="companyName")
    role: Optional[str] = None
    date_applied: Optional[date] = Field(default=None, alias="dateApplied")
    status: Optional[JobStatus] = None

    @field_validator("company_name", "role", "date_applied", "status", mode="before")
    @classmethod
    def reject_null(cls, v: Any, info: ValidationInfo) -> Any:
        if v is None:
            raise ValueError("must not be null")
        if info.field_name == "date_applied":
            return _coerce_date(v)
        return v

    @field_validator("company_name", "role")
    @classmethod
    def text_not_blank(cls, v: str) -> str:
        return _require_text(v)

    def to_update(self) -> Dict[str, Any]:
        """Stored-document fields for a `$set`, limited to supplied fields."""
        update: Dict[str, Any] = {}
        for name in self.model_fields_set:
            value = getattr(self, name)
            if name == "date_applied":
                value = date_to_datetime(value)
            elif name == "status":
                value = value.value
            update[_FIELD_KEYS[name]] = value
        return update


def date_to_datetime(value: date) -> datetime:
    """BSON has no date type, so calendar dates are stored as midnight UTC."""
    return datetime.combine(value, time.min)


def validation_messages(exc: PydanticValidationError) -> List[str]:
    """Flatten pydantic errors into `field: message` strings."""
    messages = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ())) or "body"
        messages.append(f"{field}: {err.get('msg', 'invalid value')}")
    return messages


def _ensure_object(payload: Any) -> Dict[str, Any]:
    if not isinstance(payload, dict):
        raise BadRequestError("Request body must be a JSON object")
    return payload


def parse_job_create(payload: Any) -> JobCreate:
    """Validate a create payload, raising ValidationError on bad fields."""
    try:
        return JobCreate.model_validate(_ensure_object(payload))
    except PydanticValidationError as e:
        raise ValidationError("Job validation failed", details=validation_messages(e)) from e


def parse_job_update(payload: Any) -> JobUpdate:
    """Validate an update payload, raising ValidationError on bad fields."""
    try:
        return JobUpdate.model_validate(_ensure_object(payload))
    except PydanticValidationError as e:
        raise ValidationError("Job validation failed", details=validation_messages(e)) from e


def _as_utc(value: datetime) -> datetime:
    # pymongo hands back naive datetimes that are already UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def serialize_job(job: Dict[str, Any]) -> Dict[str, Any]:
    """
    Serialize a MongoDB job document for JSON response.

    Handles ObjectId conversion and date formatting. The identifier is
    exposed as both `_id` (store-native) and `id`.
    """
    result = {}
    for key, value in job.items():
        if key == "_id":
            result["_id"] = str(value)
        elif key == "dateApplied" and isinstance(value, datetime):
            result[key] = value.date().isoformat()
        elif isinstance(value, datetime):
            result[key] = _as_utc(value).isoformat()
        elif isinstance(value, date):
            result[key] = value.isoformat()
        elif isinstance(value, ObjectId):
            result[key] = str(value)
        else:
            result[key] = value

    if "_id" in result:
        result["id"] = result["_id"]
    return result
