"""Rule-ladder machinery shared by the six factor extractors.

Each factor is an ordered list of rungs. The first rung whose predicate
holds sets the factor value and contributes its evidence; a factor with no
matching rung is left out of the factor map entirely.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date
from typing import Union

from app.core.diagnostics.scoring import score_band, weighted_score
from app.core.diagnostics.tables import QUALITY_CUTOFFS, weights_for
from app.core.diagnostics.types import (
    BusinessProfile,
    DataQuality,
    Dimension,
    DocumentRecord,
    DocumentType,
    FinancialSnapshot,
    PlatformBehavior,
    ScoreExplanation,
)


@dataclass(frozen=True)
class FactorContext:
    """Read-only view over the inputs a factor ladder may consult."""

    profile: BusinessProfile
    financial: FinancialSnapshot | None = None
    documents: tuple[DocumentRecord, ...] = ()
    behavior: PlatformBehavior | None = None
    as_of: date | None = None

    @property
    def headcount(self) -> int:
        """Full-time, part-time and casual staff."""
        p = self.profile
        return (
            (p.employee_count_fulltime or 0)
            + (p.employee_count_parttime or 0)
            + (p.employee_count_casual or 0)
        )

    @property
    def core_headcount(self) -> int:
        """Full-time and part-time staff."""
        p = self.profile
        return (p.employee_count_fulltime or 0) + (p.employee_count_parttime or 0)

    @property
    def headcount_known(self) -> bool:
        p = self.profile
        return any(
            v is not None
            for v in (
                p.employee_count_fulltime,
                p.employee_count_parttime,
                p.employee_count_casual,
            )
        )

    def has_document(self, document_type: DocumentType) -> bool:
        return any(d.document_type == document_type for d in self.documents)

    def has_valid_document(self, document_type: DocumentType) -> bool:
        """Document of this type that has no expiry or has not expired yet."""
        for doc in self.documents:
            if doc.document_type != document_type:
                continue
            if doc.expiry_date is None or self.as_of is None or doc.expiry_date > self.as_of:
                return True
        return False

    @property
    def social_link_count(self) -> int:
        links = self.profile.social_media_links or {}
        return sum(1 for value in links.values() if value)

    def has_tax_status(self, status: str) -> bool:
        return any(s.value == status for s in self.profile.tax_status or [])


Predicate = Callable[[FactorContext], bool]
Text = Union[str, Callable[[FactorContext], str]]


def always(ctx: FactorContext) -> bool:
    return True


@dataclass(frozen=True)
class Evidence:
    """A rendered evidence line plus a stable code for matching."""

    text: str
    code: str | None = None


@dataclass(frozen=True)
class Rung:
    """One step of a factor ladder."""

    when: Predicate
    value: float
    positive: Text | None = None
    negative: Text | None = None
    recommendation: Text | None = None
    code: str | None = None  # reason code for the negative evidence
    extra_positives: Callable[[FactorContext], list[str]] | None = None


@dataclass(frozen=True)
class FactorLadder:
    """
    Ordered rungs for a single factor.

    ``observed`` tells whether the inputs this factor reads were supplied;
    only observed factors count toward the data-quality tier.
    """

    key: str
    rungs: tuple[Rung, ...]
    observed: Predicate = always


@dataclass
class DimensionAssessment:
    """Everything one factor extractor produced for a dimension."""

    dimension: Dimension
    factors: dict[str, float] = field(default_factory=dict)
    positives: list[Evidence] = field(default_factory=list)
    negatives: list[Evidence] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)
    observed_count: int = 0
    score: int = 0

    @property
    def band(self) -> str:
        return score_band(self.score)

    @property
    def data_quality(self) -> DataQuality:
        cutoffs = QUALITY_CUTOFFS[self.dimension]
        if self.observed_count < cutoffs.low_below:
            return "low"
        if self.observed_count < cutoffs.medium_below:
            return "medium"
        return "high"

    def to_explanation(self) -> ScoreExplanation:
        return ScoreExplanation(
            score=self.score,
            band=self.band,
            factors_positive=[e.text for e in self.positives],
            factors_negative=[e.text for e in self.negatives],
            data_quality=self.data_quality,
            recommendations=list(self.recommendations),
        )


def _render(text: Text, ctx: FactorContext) -> str:
    return text(ctx) if callable(text) else text


def assess_dimension(
    dimension: Dimension,
    ladders: tuple[FactorLadder, ...],
    ctx: FactorContext,
) -> DimensionAssessment:
    """
    Evaluate every ladder for a dimension and score the result.

    Args:
        dimension: Dimension being scored (selects weights and cutoffs)
        ladders: Factor ladders in evidence order
        ctx: Input context

    Returns:
        DimensionAssessment with factor map, evidence and score
    """
    assessment = DimensionAssessment(dimension=dimension)

    for ladder in ladders:
        rung = next((r for r in ladder.rungs if r.when(ctx)), None)
        if rung is None:
            continue

        assessment.factors[ladder.key] = min(1.0, max(0.0, rung.value))
        if ladder.observed(ctx):
            assessment.observed_count += 1

        if rung.positive is not None:
            assessment.positives.append(Evidence(_render(rung.positive, ctx)))
        if rung.extra_positives is not None:
            assessment.positives.extend(Evidence(text) for text in rung.extra_positives(ctx))
        if rung.negative is not None:
            assessment.negatives.append(Evidence(_render(rung.negative, ctx), rung.code))
        if rung.recommendation is not None:
            assessment.recommendations.append(_render(rung.recommendation, ctx))

    assessment.score = weighted_score(assessment.factors, weights_for(dimension))
    return assessment
