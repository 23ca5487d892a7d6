"""
Enrichment Models

Result of combining parcel, zoning and assessment data for one point.
Built fresh per request and never persisted.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class EnrichmentStage(str, Enum):
    """Stages that can report an error"""

    PARCEL = "parcel"
    ZONING = "zoning"
    ASSESSMENT = "assessment"
    GENERAL = "general"


NO_PARCEL_ID_ERRORS = {
    EnrichmentStage.ZONING: "No LightBox parcel ID, cannot fetch zoning",
    EnrichmentStage.ASSESSMENT: "No LightBox parcel ID, cannot fetch assessment",
}


@dataclass
class EnrichmentRequest:
    """A validated point to enrich"""

    lat: float
    lon: float


@dataclass
class EnrichmentResult:
    """
    Best-effort merge of the three LightBox lookups

    A stage missing from ``errors`` succeeded.
    """

    parcel: Any = None
    zoning: Any = None
    assessment: Any = None
    lightbox_parcel_id: str | None = None
    lightbox_assessment_id: str | None = None
    errors: dict[EnrichmentStage, str] = field(default_factory=dict)

    def record_error(self, stage: EnrichmentStage, message: str) -> None:
        self.errors[stage] = message

    @property
    def failed_stages(self) -> list[str]:
        return [stage.value for stage in self.errors]

    @property
    def is_complete(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict[str, Any]:
        """Response body, camelCase keys as the browser client expects"""
        return {
            "parcel": self.parcel,
            "zoning": self.zoning,
            "assessment": self.assessment,
            "lightboxParcelId": self.lightbox_parcel_id,
            "lightboxAssessmentId": self.lightbox_assessment_id,
            "errors": {stage.value: message for stage, message in self.errors.items()},
        }
