"""
Enrichment Coordinator

Combines LightBox parcel, zoning and assessment lookups for one point.

Stage A (parcel) runs first because it yields the parcel ID the other two
need. Stages B (zoning) and C (assessment) then run concurrently and are
both awaited regardless of individual failure. A failed stage is recorded
in ``errors``; the overall enrichment never fails once its input is valid.
"""

import asyncio
from typing import Any

from core.logging import get_logger
from core.metrics import metrics
from d0_gateway.exceptions import GatewayError, ProviderNotConfiguredError
from d0_gateway.providers.lightbox import LightBoxClient
from d0_gateway.types import UpstreamResponse

from .identifiers import extract_assessment_id, extract_parcel_id
from .models import NO_PARCEL_ID_ERRORS, EnrichmentRequest, EnrichmentResult, EnrichmentStage

logger = get_logger(__name__, domain="d4")


def describe_failure(outcome: UpstreamResponse | BaseException) -> str:
    """Stage error text: the HTTP status if the call completed, else the exception message"""
    if isinstance(outcome, UpstreamResponse):
        return f"HTTP {outcome.status_code}"
    return str(outcome) or outcome.__class__.__name__


class EnrichmentCoordinator:
    """Runs the three-stage LightBox enrichment for a point"""

    def __init__(self, lightbox: LightBoxClient):
        self.lightbox = lightbox

    async def enrich(self, request: EnrichmentRequest) -> EnrichmentResult:
        """
        Enrich one point

        Raises:
            ProviderNotConfiguredError: LightBox credential missing (checked before any call)
        """
        self.lightbox.ensure_configured()

        logger.info(f"Enrich lat={request.lat} lon={request.lon}")
        result = EnrichmentResult()

        try:
            # Stage A: parcel under the point
            result.parcel = await self._fetch_stage(
                EnrichmentStage.PARCEL, self.lightbox.parcels_by_point(request.lat, request.lon), result
            )

            parcel_id = extract_parcel_id(result.parcel)
            if not parcel_id:
                for stage, message in NO_PARCEL_ID_ERRORS.items():
                    result.record_error(stage, message)
                logger.warning(f"No LightBox parcel ID for lat={request.lat} lon={request.lon}")
                return self._finish(result)

            result.lightbox_parcel_id = parcel_id

            # Stages B + C: both settle before either is inspected
            zoning_outcome, assessment_outcome = await asyncio.gather(
                self.lightbox.zoning_by_parcel(parcel_id),
                self.lightbox.assessment_by_parcel(parcel_id),
                return_exceptions=True,
            )

            result.zoning = self._settle(EnrichmentStage.ZONING, zoning_outcome, result, parcel_id)
            result.assessment = self._settle(EnrichmentStage.ASSESSMENT, assessment_outcome, result, parcel_id)

            # Needed later by the history and portfolio endpoints
            result.lightbox_assessment_id = extract_assessment_id(result.assessment)

        except ProviderNotConfiguredError:
            raise
        except Exception as e:
            logger.exception(f"Enrichment failed lat={request.lat} lon={request.lon}: {e}")
            result.record_error(EnrichmentStage.GENERAL, str(e) or e.__class__.__name__)

        return self._finish(result)

    async def _fetch_stage(self, stage: EnrichmentStage, call, result: EnrichmentResult) -> Any:
        """Await a single stage; record and swallow upstream failures"""
        try:
            outcome = await call
        except GatewayError as e:
            outcome = e

        if isinstance(outcome, UpstreamResponse) and outcome.ok:
            return outcome.json()

        result.record_error(stage, describe_failure(outcome))
        logger.warning(f"Enrichment stage {stage.value} failed: {result.errors[stage]}")
        return None

    def _settle(
        self,
        stage: EnrichmentStage,
        outcome: UpstreamResponse | BaseException,
        result: EnrichmentResult,
        parcel_id: str,
    ) -> Any:
        """Turn one gathered outcome into a payload or a recorded error"""
        if isinstance(outcome, UpstreamResponse) and outcome.ok:
            try:
                return outcome.json()
            except GatewayError as e:
                result.record_error(stage, str(e))
        else:
            result.record_error(stage, describe_failure(outcome))

        logger.warning(f"Enrichment stage {stage.value} failed for parcel {parcel_id}: {result.errors[stage]}")
        return None

    def _finish(self, result: EnrichmentResult) -> EnrichmentResult:
        metrics.track_enrichment(result.failed_stages)
        return result
