"""
D4 Enrichment Domain

Combines LightBox parcel, zoning and assessment data for a map point into
one response, tolerating failure of any stage.

Components:
- Models: EnrichmentRequest / EnrichmentResult
- Identifiers: provider ID extraction from upstream payloads
- Coordinator: staged fan-out with partial-failure merging
"""

from .coordinator import EnrichmentCoordinator
from .identifiers import extract_assessment_id, extract_id, extract_parcel_id
from .models import EnrichmentRequest, EnrichmentResult, EnrichmentStage

__all__ = [
    "EnrichmentCoordinator",
    "EnrichmentRequest",
    "EnrichmentResult",
    "EnrichmentStage",
    "extract_id",
    "extract_parcel_id",
    "extract_assessment_id",
]
