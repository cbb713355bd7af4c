"""Diagnosis orchestrator.

Runs the whole pipeline for one input: coverage, the six factor extractors,
bands and stage, SWOT, bottlenecks, recommendations, matching and the
narrative. The engine performs no I/O; persistence of the resulting
DiagnosticsRun is the caller's job.
"""

import json
import logging
import uuid
from datetime import datetime, timezone

from app.core.diagnostics.bottlenecks import generate_bottlenecks
from app.core.diagnostics.coverage import assess_data_coverage
from app.core.diagnostics.dimensions import DIMENSION_SCORERS
from app.core.diagnostics.ladders import DimensionAssessment, FactorContext
from app.core.diagnostics.matching import match_opportunities, match_partners
from app.core.diagnostics.narrative import build_overall_summary
from app.core.diagnostics.recommendations import generate_recommendations
from app.core.diagnostics.scoring import detect_business_stage, health_band
from app.core.diagnostics.swot import generate_swot
from app.core.diagnostics.tables import MODEL_VERSION, PROMPT_VERSION
from app.core.diagnostics.types import (
    DiagnosticsInput,
    DiagnosticsOutput,
    DiagnosticsRun,
    DiagnosticsRunMeta,
    DiagnosticsScores,
    Dimension,
    ScoreExplanations,
)
from app.core.logging import get_logger, log_with_context

logger = get_logger(__name__)


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value >= 0x80000000 else value


def compute_input_hash(data: DiagnosticsInput) -> str:
    """
    Stable hash of the fields that decide whether a diagnosis is stale.

    Covers the profile id, financial-data and behavior last-modified
    timestamps and the document count. Serialized as compact JSON (absent
    timestamps omitted), then folded with a 32-bit ``h * 31 + c`` rolling
    hash over UTF-16 code units. Not a cryptographic digest.

    Returns:
        Lowercase hex of the absolute hash value
    """
    payload = {"profile_id": data.profile.id}
    if data.financial_data is not None and data.financial_data.updated_at is not None:
        payload["financial_updated"] = data.financial_data.updated_at
    payload["doc_count"] = len(data.documents or [])
    if data.platform_behavior is not None and data.platform_behavior.updated_at is not None:
        payload["behavior_updated"] = data.platform_behavior.updated_at

    serialized = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
    encoded = serialized.encode("utf-16-le")

    value = 0
    for i in range(0, len(encoded), 2):
        code_unit = int.from_bytes(encoded[i : i + 2], "little")
        value = _to_int32((value << 5) - value + code_unit)

    return format(abs(value), "x")


def score_all_dimensions(ctx: FactorContext) -> dict[Dimension, DimensionAssessment]:
    """Run every factor extractor, in canonical dimension order."""
    return {dim: scorer(ctx) for dim, scorer in DIMENSION_SCORERS.items()}


def run_diagnosis(
    data: DiagnosticsInput,
    model_version: str = MODEL_VERSION,
    prompt_version: str = PROMPT_VERSION,
) -> DiagnosticsOutput:
    """
    Produce a complete diagnosis for one business.

    Args:
        data: Profile plus optional financial, document, behavior and benchmark data
        model_version: Version string recorded in the output metadata
        prompt_version: Version string recorded in the output metadata

    Returns:
        DiagnosticsOutput; never partial
    """
    as_of = data.as_of or datetime.now(timezone.utc)

    coverage_level, sources = assess_data_coverage(data)
    logger.debug(f"Data coverage for profile {data.profile.id}: {coverage_level.value} from {sources}")

    ctx = FactorContext(
        profile=data.profile,
        financial=data.financial_data,
        documents=tuple(data.documents or ()),
        behavior=data.platform_behavior,
        as_of=as_of.date(),
    )
    assessments = score_all_dimensions(ctx)

    scores = DiagnosticsScores(**{dim.value: a.score for dim, a in assessments.items()})
    explanations = ScoreExplanations(
        **{dim.value: a.to_explanation() for dim, a in assessments.items()}
    )
    logger.debug(
        f"Scored dimensions for profile {data.profile.id}",
        extra={"extra_data": scores.model_dump(mode="json")},
    )

    band = health_band(scores)
    stage = detect_business_stage(data.profile, data.financial_data, scores)
    logger.debug(f"Classified profile {data.profile.id} as {band.value} / {stage.value}")

    swot = generate_swot(
        data.profile,
        scores,
        explanations,
        financial_data=data.financial_data,
        sector_benchmark=data.sector_benchmark,
    )
    logger.debug(
        f"SWOT for profile {data.profile.id}: {len(swot.strengths)} strengths, "
        f"{len(swot.weaknesses)} weaknesses, {len(swot.opportunities)} opportunities, "
        f"{len(swot.threats)} threats"
    )
    bottlenecks = generate_bottlenecks(assessments)
    recommendations = generate_recommendations(bottlenecks, explanations)
    partners = match_partners(data.profile, scores, data.financial_data)
    opportunities = match_opportunities(data.profile, scores)
    logger.debug(
        f"Matched {len(partners)} partners and {len(opportunities)} opportunities "
        f"for profile {data.profile.id}"
    )

    summary = build_overall_summary(data.profile, scores, band, stage, swot, bottlenecks)

    log_with_context(
        logger,
        logging.INFO,
        "Diagnosis completed",
        profile_id=data.profile.id,
        coverage=coverage_level.value,
        health_band=band.value,
        business_stage=stage.value,
        bottlenecks=len(bottlenecks),
        recommendations=len(recommendations),
        **{dim.value: score for dim, score in scores.by_dimension().items()},
    )

    return DiagnosticsOutput(
        overall_summary=summary,
        swot_analysis=swot,
        scores=scores,
        score_explanations=explanations,
        bottlenecks=bottlenecks,
        recommendations=recommendations,
        recommended_partners=partners,
        suggested_opportunities=opportunities,
        meta=DiagnosticsRunMeta(
            last_updated=as_of,
            data_coverage_level=coverage_level,
            data_sources_used=sources,
            model_version=model_version,
            prompt_version=prompt_version,
        ),
    )


def create_diagnostics_run(
    user_id: str,
    data: DiagnosticsInput,
    output: DiagnosticsOutput,
    run_id: str | None = None,
) -> DiagnosticsRun:
    """
    Flatten a diagnosis into a persistence-ready run record.

    Args:
        user_id: Owner of the run
        data: The input the output was computed from (hashed)
        output: Result of run_diagnosis
        run_id: Optional explicit id (a new UUID4 otherwise)

    Returns:
        DiagnosticsRun with status "completed"
    """
    scores = output.scores
    return DiagnosticsRun(
        id=run_id or str(uuid.uuid4()),
        user_id=user_id,
        model_version=output.meta.model_version,
        prompt_version=output.meta.prompt_version,
        input_hash=compute_input_hash(data),
        data_coverage_level=output.meta.data_coverage_level,
        data_sources_used=list(output.meta.data_sources_used),
        funding_readiness_score=scores.funding_readiness,
        compliance_maturity_score=scores.compliance_maturity,
        governance_maturity_score=scores.governance_maturity,
        digital_maturity_score=scores.digital_maturity,
        market_readiness_score=scores.market_readiness,
        operational_efficiency_score=scores.operational_efficiency,
        overall_health_band=output.overall_summary.health_band,
        business_stage=output.overall_summary.business_stage,
        swot_analysis=output.swot_analysis,
        bottlenecks=output.bottlenecks,
        recommendations=output.recommendations,
        recommended_partners=output.recommended_partners,
        suggested_opportunities=output.suggested_opportunities,
        narrative_summary=output.overall_summary.narrative,
        score_explanations=output.score_explanations,
        status="completed",
    )
