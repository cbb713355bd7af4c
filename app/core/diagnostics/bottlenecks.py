"""Bottleneck generation from low-scoring dimensions."""

from collections.abc import Mapping

from app.core.diagnostics.ladders import DimensionAssessment
from app.core.diagnostics.tables import BOTTLENECK_AREAS, BOTTLENECK_IMPACTS, DEFAULT_IMPACT
from app.core.diagnostics.types import Bottleneck, Dimension, Severity

BOTTLENECK_SCORE_BELOW = 50
MAX_BOTTLENECKS = 10

SEVERITY_ORDER = {
    Severity.CRITICAL: 0,
    Severity.HIGH: 1,
    Severity.MEDIUM: 2,
    Severity.LOW: 3,
}


def severity_for_score(score: int) -> Severity:
    """Severity of bottlenecks raised by a dimension with this score."""
    if score < 30:
        return Severity.HIGH
    if score < 40:
        return Severity.MEDIUM
    return Severity.LOW


def bottleneck_impact(dimension: Dimension) -> str:
    return BOTTLENECK_IMPACTS.get(dimension, DEFAULT_IMPACT)


def generate_bottlenecks(assessments: Mapping[Dimension, DimensionAssessment]) -> list[Bottleneck]:
    """
    Turn negative evidence from dimensions scoring below 50 into bottlenecks.

    Args:
        assessments: Dimension assessments in canonical order

    Returns:
        Bottlenecks sorted by severity (stable), at most 10
    """
    bottlenecks: list[Bottleneck] = []

    for dim, assessment in assessments.items():
        if assessment.score >= BOTTLENECK_SCORE_BELOW:
            continue

        severity = severity_for_score(assessment.score)
        for idx, evidence in enumerate(assessment.negatives):
            bottlenecks.append(
                Bottleneck(
                    id=f"bn-{dim.value}-{idx}",
                    area=BOTTLENECK_AREAS[dim],
                    severity=severity,
                    description=evidence.text,
                    impact=bottleneck_impact(dim),
                    data_source=dim,
                    reason_code=evidence.code,
                )
            )

    bottlenecks.sort(key=lambda b: SEVERITY_ORDER[b.severity])
    return bottlenecks[:MAX_BOTTLENECKS]
