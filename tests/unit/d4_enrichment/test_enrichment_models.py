"""
Test enrichment result model
"""
from d4_enrichment.models import EnrichmentResult, EnrichmentStage


def test_empty_result_shape():
    assert EnrichmentResult().to_dict() == {
        "parcel": None,
        "zoning": None,
        "assessment": None,
        "lightboxParcelId": None,
        "lightboxAssessmentId": None,
        "errors": {},
    }


def test_record_error():
    result = EnrichmentResult()
    result.record_error(EnrichmentStage.ZONING, "HTTP 500")
    result.record_error(EnrichmentStage.GENERAL, "boom")

    assert not result.is_complete
    assert result.failed_stages == ["zoning", "general"]
    assert result.to_dict()["errors"] == {"zoning": "HTTP 500", "general": "boom"}
