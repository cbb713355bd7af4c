"""Diagnostics dimension scorers (factor extractors)."""

from app.core.diagnostics.dimensions.compliance import score_compliance_maturity
from app.core.diagnostics.dimensions.digital import score_digital_maturity
from app.core.diagnostics.dimensions.funding import score_funding_readiness
from app.core.diagnostics.dimensions.governance import score_governance_maturity
from app.core.diagnostics.dimensions.market import score_market_readiness
from app.core.diagnostics.dimensions.operations import score_operational_efficiency
from app.core.diagnostics.types import Dimension

# Canonical order; every downstream stage iterates dimensions in this order.
DIMENSION_SCORERS = {
    Dimension.FUNDING_READINESS: score_funding_readiness,
    Dimension.COMPLIANCE_MATURITY: score_compliance_maturity,
    Dimension.DIGITAL_MATURITY: score_digital_maturity,
    Dimension.GOVERNANCE_MATURITY: score_governance_maturity,
    Dimension.MARKET_READINESS: score_market_readiness,
    Dimension.OPERATIONAL_EFFICIENCY: score_operational_efficiency,
}

__all__ = [
    "DIMENSION_SCORERS",
    "score_funding_readiness",
    "score_compliance_maturity",
    "score_digital_maturity",
    "score_governance_maturity",
    "score_market_readiness",
    "score_operational_efficiency",
]
