"""Market readiness dimension.

Key question: "Does the business know who it sells to, and how widely?"
"""

from app.core.diagnostics.ladders import (
    DimensionAssessment,
    FactorContext,
    FactorLadder,
    Rung,
    assess_dimension,
    always,
)
from app.core.diagnostics.types import Dimension


def _top_clients_pct(ctx: FactorContext) -> float | None:
    return ctx.financial.top_3_clients_revenue_pct if ctx.financial is not None else None


def _regions(ctx: FactorContext) -> list[str]:
    return ctx.profile.operating_regions or []


def _has_social(ctx: FactorContext) -> bool:
    return len(ctx.profile.social_media_links or {}) > 0


def _joined(values) -> str:
    return ", ".join(getattr(v, "value", v) for v in values)


LADDERS: tuple[FactorLadder, ...] = (
    FactorLadder(
        key="clear_business_model",
        observed=lambda c: c.profile.business_model is not None,
        rungs=(
            Rung(
                when=lambda c: bool(c.profile.business_model),
                value=1.0,
                positive=lambda c: f"Clear business model: {_joined(c.profile.business_model)}",
            ),
            Rung(
                when=always,
                value=0.0,
                negative="Business model not defined",
                code="no_business_model",
                recommendation="Clearly define your business model (B2B, B2C, B2G)",
            ),
        ),
    ),
    FactorLadder(
        key="defined_revenue_model",
        observed=lambda c: c.profile.revenue_model is not None,
        rungs=(
            Rung(
                when=lambda c: bool(c.profile.revenue_model),
                value=1.0,
                positive=lambda c: f"Defined revenue streams: {_joined(c.profile.revenue_model)}",
            ),
            Rung(
                when=always,
                value=0.0,
                negative="Revenue model not defined",
                code="no_revenue_model",
                recommendation="Document your revenue streams clearly",
            ),
        ),
    ),
    FactorLadder(
        key="customer_diversification",
        rungs=(
            Rung(
                when=lambda c: _top_clients_pct(c) is not None and _top_clients_pct(c) < 40,
                value=1.0,
                positive="Well-diversified customer base",
            ),
            Rung(
                when=lambda c: _top_clients_pct(c) is not None and _top_clients_pct(c) < 60,
                value=0.6,
                positive="Moderately diversified customer base",
                recommendation="Work on diversifying customer base",
            ),
            Rung(
                when=lambda c: _top_clients_pct(c) is not None,
                value=0.2,
                negative="High customer concentration risk",
                code="customer_concentration",
                recommendation="Reduce dependency on top customers",
            ),
        ),
    ),
    FactorLadder(
        key="sector_positioning",
        observed=lambda c: c.profile.sector is not None,
        rungs=(
            Rung(
                when=lambda c: bool(c.profile.sector) and bool(c.profile.sub_sector),
                value=1.0,
                positive=lambda c: f"Clear sector focus: {c.profile.sector} - {c.profile.sub_sector}",
            ),
            Rung(
                when=lambda c: bool(c.profile.sector),
                value=0.7,
                positive=lambda c: f"Operating in {c.profile.sector} sector",
            ),
            Rung(
                when=always,
                value=0.0,
                negative="Sector not defined",
                code="no_sector",
                recommendation="Define your sector and niche clearly",
            ),
        ),
    ),
    FactorLadder(
        key="years_track_record",
        observed=lambda c: c.profile.years_in_operation is not None,
        rungs=(
            Rung(
                when=lambda c: (c.profile.years_in_operation or 0) >= 5,
                value=1.0,
                positive=lambda c: f"Strong track record ({c.profile.years_in_operation} years)",
            ),
            Rung(
                when=lambda c: (c.profile.years_in_operation or 0) >= 2,
                value=0.6,
                positive=lambda c: f"Building track record ({c.profile.years_in_operation} years)",
            ),
            Rung(
                when=always,
                value=0.2,
                negative="Limited operating history",
                code="limited_history",
            ),
        ),
    ),
    FactorLadder(
        key="geographic_presence",
        observed=lambda c: c.profile.operating_regions is not None or c.profile.city is not None,
        rungs=(
            Rung(
                when=lambda c: len(_regions(c)) >= 3,
                value=1.0,
                positive=lambda c: f"Operating in {len(_regions(c))} regions",
            ),
            Rung(
                when=lambda c: len(_regions(c)) >= 1,
                value=0.5,
                positive="Regional presence established",
            ),
            Rung(
                when=lambda c: bool(c.profile.city),
                value=0.3,
                positive=lambda c: f"Operating in {c.profile.city}",
            ),
            Rung(when=always, value=0.0),
        ),
    ),
    FactorLadder(
        key="online_presence",
        observed=lambda c: c.profile.website_url is not None or c.profile.social_media_links is not None,
        rungs=(
            Rung(
                when=lambda c: bool(c.profile.website_url) and _has_social(c),
                value=1.0,
                positive="Strong online presence",
            ),
            Rung(
                when=lambda c: bool(c.profile.website_url) or _has_social(c),
                value=0.5,
                positive="Online presence established",
            ),
            Rung(
                when=always,
                value=0.0,
                negative="No online presence",
                code="no_online_presence",
                recommendation="Develop online presence for better market reach",
            ),
        ),
    ),
)


def score_market_readiness(ctx: FactorContext) -> DimensionAssessment:
    return assess_dimension(Dimension.MARKET_READINESS, LADDERS, ctx)
