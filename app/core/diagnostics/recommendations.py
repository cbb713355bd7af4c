"""Recommendation generation.

Three tiers are emitted in order and numbered by a single counter local to
the call: urgent bottlenecks (NOW), medium bottlenecks (NEXT), then the
improvement hints of mid-range dimensions (LATER). Priorities follow
emission order and the list is never re-sorted.
"""

import itertools
from collections.abc import Iterator

from app.core.diagnostics.tables import (
    DIMENSION_LABELS,
    GENERIC_IMPLEMENTATION_STEPS,
    GENERIC_REMEDIATION_STEPS,
    REMEDIATION_TEMPLATES,
    RemediationTemplate,
)
from app.core.diagnostics.types import (
    Bottleneck,
    Difficulty,
    Recommendation,
    ScoreExplanations,
    Severity,
    TimelineCategory,
)

MAX_RECOMMENDATIONS = 15
LATER_SCORE_RANGE = (50, 80)  # [low, high)


def find_remediation(bottleneck: Bottleneck) -> RemediationTemplate | None:
    """
    Find the remediation template for a bottleneck.

    Matches on reason code first, then on a case-insensitive substring of
    the description, in table order.
    """
    if bottleneck.reason_code:
        for template in REMEDIATION_TEMPLATES:
            if template.code == bottleneck.reason_code:
                return template

    description = bottleneck.description.lower()
    for template in REMEDIATION_TEMPLATES:
        if template.pattern.lower() in description:
            return template
    return None


def recommendation_for_bottleneck(
    bottleneck: Bottleneck,
    priority: int,
    timeline: TimelineCategory,
) -> Recommendation:
    """Build a recommendation from a template, or a generic plan when none matches."""
    template = find_remediation(bottleneck)

    if template is None:
        return Recommendation(
            id=f"rec-bn-{priority}",
            priority=priority,
            area=bottleneck.area,
            action=f"Address: {bottleneck.description}",
            why=bottleneck.impact,
            how=list(GENERIC_REMEDIATION_STEPS),
            estimated_time="1-3 months" if timeline == TimelineCategory.NOW else "3-6 months",
            difficulty=Difficulty.MEDIUM,
            timeline_category=timeline,
            related_bottleneck_id=bottleneck.id,
        )

    return Recommendation(
        id=f"rec-bn-{priority}",
        priority=priority,
        area=bottleneck.area,
        action=template.action,
        why=bottleneck.impact,
        how=list(template.steps),
        estimated_time=template.effort,
        difficulty=template.difficulty,
        timeline_category=timeline,
        related_bottleneck_id=bottleneck.id,
    )


def _bottleneck_tier(
    bottlenecks: list[Bottleneck],
    severities: tuple[Severity, ...],
    timeline: TimelineCategory,
    priorities: Iterator[int],
) -> list[Recommendation]:
    return [
        recommendation_for_bottleneck(b, next(priorities), timeline)
        for b in bottlenecks
        if b.severity in severities
    ]


def generate_recommendations(
    bottlenecks: list[Bottleneck],
    explanations: ScoreExplanations,
) -> list[Recommendation]:
    """
    Build the prioritized action plan.

    Args:
        bottlenecks: Severity-sorted bottlenecks
        explanations: Per-dimension explanations (for LATER items)

    Returns:
        At most 15 recommendations, priorities 1..n in emission order
    """
    priorities = itertools.count(start=1)

    recommendations = _bottleneck_tier(
        bottlenecks, (Severity.HIGH, Severity.CRITICAL), TimelineCategory.NOW, priorities
    )
    recommendations += _bottleneck_tier(
        bottlenecks, (Severity.MEDIUM,), TimelineCategory.NEXT, priorities
    )

    low, high = LATER_SCORE_RANGE
    for dim, explanation in explanations.by_dimension().items():
        if not low <= explanation.score < high:
            continue
        for text in explanation.recommendations:
            priority = next(priorities)
            recommendations.append(
                Recommendation(
                    id=f"rec-{dim.value}-{priority}",
                    priority=priority,
                    area=DIMENSION_LABELS[dim],
                    action=text,
                    why="Will improve your overall business health score",
                    how=list(GENERIC_IMPLEMENTATION_STEPS),
                    estimated_time="3-6 months",
                    difficulty=Difficulty.MEDIUM,
                    timeline_category=TimelineCategory.LATER,
                )
            )

    return recommendations[:MAX_RECOMMENDATIONS]
