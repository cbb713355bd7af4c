"""Digital maturity dimension.

Key question: "Can customers find, reach and buy from this business online?"
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


def _response_hours(ctx: FactorContext) -> float | None:
    return ctx.behavior.avg_response_time_hours if ctx.behavior is not None else None


LADDERS: tuple[FactorLadder, ...] = (
    FactorLadder(
        key="website_presence",
        observed=lambda c: c.profile.website_url is not None,
        rungs=(
            Rung(
                when=lambda c: bool(c.profile.website_url),
                value=1.0,
                positive="Business website available",
            ),
            Rung(
                when=always,
                value=0.0,
                negative="No business website",
                code="no_website",
                recommendation="Create a business website to improve digital presence",
            ),
        ),
    ),
    FactorLadder(
        key="social_media_presence",
        observed=lambda c: c.profile.social_media_links is not None,
        rungs=(
            Rung(
                when=lambda c: c.social_link_count >= 3,
                value=1.0,
                positive="Strong social media presence (3+ platforms)",
            ),
            Rung(
                when=lambda c: c.social_link_count >= 1,
                value=0.5,
                positive=lambda c: f"Social media presence ({c.social_link_count} platform(s))",
                recommendation="Expand social media presence to more platforms",
            ),
            Rung(
                when=always,
                value=0.0,
                negative="No social media presence",
                code="no_social_media",
                recommendation="Establish social media presence on key platforms",
            ),
        ),
    ),
    FactorLadder(
        key="online_sales_channels",
        observed=lambda c: c.profile.online_store_presence is not None,
        rungs=(
            Rung(
                when=lambda c: len(c.profile.online_store_presence or []) >= 2,
                value=1.0,
                positive="Multiple online sales channels",
            ),
            Rung(
                when=lambda c: len(c.profile.online_store_presence or []) == 1,
                value=0.5,
                positive="Online sales channel available",
                recommendation="Explore additional online sales channels",
            ),
            Rung(
                when=always,
                value=0.0,
                negative="No online sales channels",
                code="no_online_sales",
                recommendation="Set up online selling through e-commerce or social commerce",
            ),
        ),
    ),
    FactorLadder(
        key="erp_system",
        observed=lambda c: c.profile.uses_erp is not None,
        rungs=(
            Rung(when=lambda c: bool(c.profile.uses_erp), value=1.0, positive="Uses ERP system"),
            Rung(
                when=always,
                value=0.0,
                recommendation="Consider implementing an ERP system for better operations management",
            ),
        ),
    ),
    FactorLadder(
        key="pos_system",
        observed=lambda c: c.profile.uses_pos is not None,
        rungs=(
            Rung(when=lambda c: bool(c.profile.uses_pos), value=1.0, positive="Uses POS system"),
            Rung(when=always, value=0.0),
        ),
    ),
    FactorLadder(
        key="accounting_software",
        observed=lambda c: c.profile.uses_accounting_software is not None,
        rungs=(
            Rung(
                when=lambda c: bool(c.profile.uses_accounting_software),
                value=1.0,
                positive="Uses accounting software",
            ),
            Rung(
                when=always,
                value=0.0,
                negative="No accounting software",
                code="no_accounting_software",
                recommendation="Adopt accounting software for better financial management",
            ),
        ),
    ),
    FactorLadder(
        key="responsiveness",
        rungs=(
            Rung(
                when=lambda c: _response_hours(c) is not None and _response_hours(c) <= 4,
                value=1.0,
                positive="Excellent response time",
            ),
            Rung(
                when=lambda c: _response_hours(c) is not None and _response_hours(c) <= 24,
                value=0.7,
                positive="Good response time",
            ),
            Rung(
                when=lambda c: _response_hours(c) is not None,
                value=0.3,
                recommendation="Improve response time to inquiries",
            ),
        ),
    ),
)


def score_digital_maturity(ctx: FactorContext) -> DimensionAssessment:
    return assess_dimension(Dimension.DIGITAL_MATURITY, LADDERS, ctx)
