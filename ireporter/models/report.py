"""
Pydantic models for red-flag and intervention reports.
These models describe the client's in-memory view of a report and the
payloads exchanged with the Report Service.

Wire format is camelCase (incidentDate, reportDate, userId); Python
attributes are snake_case and populated by either name.
"""

from pydantic import BaseModel, Field, field_validator
from datetime import date
from typing import Optional, List, Union, Literal
from enum import Enum


class ReportType(str, Enum):
    """Kind of incident being reported. Immutable after creation."""
    RED_FLAG = "RED_FLAG"              # Corruption-related incident
    INTERVENTION = "INTERVENTION"      # Call for government intervention


class ReportStatus(str, Enum):
    """
    Report lifecycle states.

    DRAFT only exists client-side before the first successful submission;
    the Report Service never returns it.
    """
    DRAFT = "draft"
    PENDING = "PENDING"
    UNDER_INVESTIGATION = "UNDER_INVESTIGATION"
    RESOLVED = "RESOLVED"
    REJECTED = "REJECTED"


class Role(str, Enum):
    """Acting role for a transition."""
    SUBMITTER = "SUBMITTER"
    ADMINISTRATOR = "ADMINISTRATOR"


# Facet value that disables status filtering in the View Filter
ALL_STATUSES = "All"
StatusFacet = Union[ReportStatus, Literal["All"]]


def _coerce_date(value):
    # Report Service may send full ISO timestamps for date fields
    if isinstance(value, str) and "T" in value:
        return value.split("T", 1)[0]
    return value


def _non_blank(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    value = value.strip()
    if not value:
        raise ValueError("must not be blank")
    return value


class Location(BaseModel):
    """Geographic coordinate pair."""
    latitude: float = Field(..., ge=-90, le=90, description="Latitude in decimal degrees")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude in decimal degrees")


class LocationPayload(BaseModel):
    """
    Location as sent on create: both coordinates null when the user
    supplied none.
    """
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)

    def to_location(self) -> Optional[Location]:
        if self.latitude is None or self.longitude is None:
            return None
        return Location(latitude=self.latitude, longitude=self.longitude)


class Report(BaseModel):
    """
    A red-flag or intervention record as held in a Report Store.
    """
    id: Optional[str] = Field(None, description="Identifier assigned by the Report Service")
    type: ReportType = Field(..., description="RED_FLAG or INTERVENTION")
    status: ReportStatus = Field(default=ReportStatus.DRAFT, description="Lifecycle status")
    title: str = Field(..., min_length=1, description="Short headline")
    description: str = Field(..., min_length=1, description="What happened")
    location: Optional[Location] = Field(None, description="Where it happened (optional)")
    incident_date: date = Field(..., alias="incidentDate", description="When it happened")
    report_date: date = Field(default_factory=date.today, alias="reportDate", description="Creation date")
    images: List[str] = Field(default_factory=list, description="Attachment references (not wired)")

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value):
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @field_validator("incident_date", "report_date", mode="before")
    @classmethod
    def _date_only(cls, value):
        return _coerce_date(value)

    @field_validator("location", mode="before")
    @classmethod
    def _empty_location(cls, value):
        # Reports created without coordinates come back as {latitude: null, longitude: null}
        if isinstance(value, dict) and (value.get("latitude") is None or value.get("longitude") is None):
            return None
        return value

    def to_wire(self) -> dict:
        """Serialize with the Report Service's camelCase field names."""
        return self.model_dump(mode="json", by_alias=True)

    class Config:
        populate_by_name = True
        extra = "ignore"


class ReportUpdate(BaseModel):
    """
    Fields a submitter may change on a mutable report (PATCH body).
    Type, status and report date are not editable.
    """
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    incident_date: Optional[date] = Field(None, alias="incidentDate")

    @field_validator("title", "description")
    @classmethod
    def _strip_text(cls, value):
        return _non_blank(value)

    def changes(self) -> dict:
        """Only the fields the caller actually set, keyed by attribute name."""
        return self.model_dump(exclude_unset=True, exclude_none=True)

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True, exclude_none=True)

    class Config:
        populate_by_name = True


class StatusUpdateRequest(BaseModel):
    """Administrator status change (PUT body)."""
    status: ReportStatus = Field(..., description="New status value")


class ReportCreateRequest(BaseModel):
    """
    Model for the POST /report body.
    Location is always sent; coordinates are null when the user supplied none.
    """
    type: ReportType
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    incident_date: date = Field(..., alias="incidentDate")
    report_date: date = Field(default_factory=date.today, alias="reportDate")
    location: LocationPayload = Field(default_factory=LocationPayload)
    user_id: str = Field(..., alias="userId", description="Submitting user")

    @field_validator("title", "description")
    @classmethod
    def _strip_text(cls, value):
        return _non_blank(value)

    @field_validator("incident_date", "report_date", mode="before")
    @classmethod
    def _date_only(cls, value):
        return _coerce_date(value)

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "type": "RED_FLAG",
                "title": "Bribe demanded at checkpoint",
                "description": "Officer asked for cash to let the bus through.",
                "incidentDate": "2024-05-01",
                "reportDate": "2024-05-02",
                "location": {"latitude": 6.5244, "longitude": 3.3792},
                "userId": "u-1",
            }
        }
