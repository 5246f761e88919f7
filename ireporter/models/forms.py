"""
Input form state owned by the submitter view.

Forms are mutable on purpose: a failed submission must leave exactly what
the user typed, and a successful one resets the create form.
"""

from pydantic import BaseModel, Field
import math
from datetime import date
from typing import Optional, Dict, List

from ireporter.core.exceptions import ReportValidationError
from ireporter.models.report import Location, Report, ReportCreateRequest, ReportType, ReportUpdate


class ReportForm(BaseModel):
    """Create-report form. Report date is read-only and always today."""
    type: ReportType = ReportType.RED_FLAG
    title: str = ""
    description: str = ""
    incident_date: Optional[date] = None
    report_date: date = Field(default_factory=date.today)
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    images: List[str] = Field(default_factory=list)

    def reset(self) -> None:
        """Return every field to its initial value."""
        blank = ReportForm()
        for name in type(self).model_fields:
            setattr(self, name, getattr(blank, name))

    def location(self) -> Optional[Location]:
        if self.latitude is None or self.longitude is None:
            return None
        return Location(latitude=self.latitude, longitude=self.longitude)

    def validate_for_submit(self, today: Optional[date] = None) -> None:
        """
        Check required fields and the incident date.

        Raises:
            ReportValidationError: listing every problem found
        """
        today = today or date.today()
        errors: Dict[str, str] = {}

        if not self.title.strip():
            errors["title"] = "Title is required"
        if not self.description.strip():
            errors["description"] = "Description is required"
        if self.incident_date is None:
            errors["incident_date"] = "Date of incident is required"
        elif self.incident_date > today:
            errors["incident_date"] = "Date of incident cannot be in the future"
        if (self.latitude is None) != (self.longitude is None):
            errors["location"] = "Latitude and longitude must be supplied together"
        elif self.latitude is not None and not (
            math.isfinite(self.latitude) and math.isfinite(self.longitude)
            and -90 <= self.latitude <= 90 and -180 <= self.longitude <= 180
        ):
            errors["location"] = "Latitude must be within -90..90 and longitude within -180..180"

        if errors:
            raise ReportValidationError(errors)

    def to_create_request(self, user_id: str) -> ReportCreateRequest:
        location = self.location()
        return ReportCreateRequest(
            type=self.type,
            title=self.title.strip(),
            description=self.description.strip(),
            incident_date=self.incident_date,
            report_date=self.report_date,
            location={
                "latitude": location.latitude if location else None,
                "longitude": location.longitude if location else None,
            },
            user_id=user_id,
        )

    def to_report(self, report_id: str, status) -> Report:
        """Rebuild the created report locally from the submitted values."""
        return Report(
            id=report_id,
            type=self.type,
            status=status,
            title=self.title.strip(),
            description=self.description.strip(),
            location=self.location(),
            incident_date=self.incident_date,
            report_date=self.report_date,
            images=list(self.images),
        )


class EditSession(BaseModel):
    """Edit dialog state for a single report."""
    is_open: bool = False
    report_id: Optional[str] = None
    title: str = ""
    description: str = ""
    incident_date: Optional[date] = None

    def open_for(self, report: Report) -> None:
        self.is_open = True
        self.report_id = report.id
        self.title = report.title
        self.description = report.description
        self.incident_date = report.incident_date

    def close(self) -> None:
        self.is_open = False
        self.report_id = None
        self.title = ""
        self.description = ""
        self.incident_date = None

    def to_update(self, today: Optional[date] = None) -> ReportUpdate:
        today = today or date.today()
        errors: Dict[str, str] = {}
        if not self.title.strip():
            errors["title"] = "Title is required"
        if not self.description.strip():
            errors["description"] = "Description is required"
        if self.incident_date is None:
            errors["incident_date"] = "Incident date is required"
        elif self.incident_date > today:
            errors["incident_date"] = "Incident date cannot be in the future"
        if errors:
            raise ReportValidationError(errors)
        return ReportUpdate(
            title=self.title.strip(),
            description=self.description.strip(),
            incident_date=self.incident_date,
        )
