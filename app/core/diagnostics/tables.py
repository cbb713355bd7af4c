"""Versioned data tables for the diagnostics engine.

Weights, data-quality cutoffs, remediation templates and fixed copy live
here so they can be reviewed and updated without touching control flow.
Bump TABLES_VERSION whenever a value in this module changes.
"""

from dataclasses import dataclass

from app.core.diagnostics.types import Difficulty, Dimension

TABLES_VERSION = "2025.11"

MODEL_VERSION = "v1.0"
PROMPT_VERSION = "v1.0"


@dataclass(frozen=True)
class FactorWeight:
    """Weight of one factor within a dimension."""

    key: str
    weight: int


@dataclass(frozen=True)
class QualityCutoffs:
    """Observed-factor counts below which data quality is low / medium."""

    low_below: int
    medium_below: int


@dataclass(frozen=True)
class RemediationTemplate:
    """Concrete steps for a well-known bottleneck."""

    code: str
    pattern: str  # matched case-insensitively against the bottleneck description
    action: str
    steps: tuple[str, ...]
    effort: str
    difficulty: Difficulty


# =============================================================================
# Factor weights per dimension
# =============================================================================

WEIGHT_TABLES: dict[Dimension, tuple[FactorWeight, ...]] = {
    Dimension.FUNDING_READINESS: (
        FactorWeight("formal_registration", 15),
        FactorWeight("years_in_business", 10),
        FactorWeight("has_revenue_data", 15),
        FactorWeight("revenue_trend_positive", 10),
        FactorWeight("profitability", 10),
        FactorWeight("has_financial_records", 15),
        FactorWeight("has_audited_statements", 10),
        FactorWeight("debt_repayment_behavior", 10),
        FactorWeight("compliance_complete", 5),
    ),
    Dimension.COMPLIANCE_MATURITY: (
        FactorWeight("tax_registration", 20),
        FactorWeight("tax_clearance", 20),
        FactorWeight("annual_return_filing", 15),
        FactorWeight("industry_licenses", 15),
        FactorWeight("hr_policies_contracts", 15),
        FactorWeight("governance_structures", 15),
    ),
    Dimension.DIGITAL_MATURITY: (
        FactorWeight("website_presence", 20),
        FactorWeight("social_media_presence", 15),
        FactorWeight("online_sales_channels", 20),
        FactorWeight("erp_system", 15),
        FactorWeight("pos_system", 10),
        FactorWeight("accounting_software", 15),
        FactorWeight("responsiveness", 5),
    ),
    Dimension.GOVERNANCE_MATURITY: (
        FactorWeight("board_advisory_presence", 25),
        FactorWeight("written_policies", 25),
        FactorWeight("role_segregation", 20),
        FactorWeight("risk_management", 15),
        FactorWeight("audit_practices", 15),
    ),
    Dimension.MARKET_READINESS: (
        FactorWeight("clear_business_model", 20),
        FactorWeight("defined_revenue_model", 15),
        FactorWeight("customer_diversification", 15),
        FactorWeight("sector_positioning", 15),
        FactorWeight("years_track_record", 15),
        FactorWeight("geographic_presence", 10),
        FactorWeight("online_presence", 10),
    ),
    Dimension.OPERATIONAL_EFFICIENCY: (
        FactorWeight("employee_structure", 15),
        FactorWeight("digital_tools_adoption", 20),
        FactorWeight("financial_management", 20),
        FactorWeight("customer_management", 15),
        FactorWeight("platform_engagement", 15),
        FactorWeight("process_automation", 15),
    ),
}

# Heuristic cutoffs carried over per dimension; not calibrated, so new
# dimensions need their own.
QUALITY_CUTOFFS: dict[Dimension, QualityCutoffs] = {
    Dimension.FUNDING_READINESS: QualityCutoffs(low_below=3, medium_below=6),
    Dimension.COMPLIANCE_MATURITY: QualityCutoffs(low_below=2, medium_below=4),
    Dimension.DIGITAL_MATURITY: QualityCutoffs(low_below=2, medium_below=5),
    Dimension.GOVERNANCE_MATURITY: QualityCutoffs(low_below=2, medium_below=4),
    Dimension.MARKET_READINESS: QualityCutoffs(low_below=3, medium_below=5),
    Dimension.OPERATIONAL_EFFICIENCY: QualityCutoffs(low_below=2, medium_below=4),
}


# =============================================================================
# Labels and fixed copy
# =============================================================================

# Lowercase label used for SWOT categories, recommendation areas and narrative.
DIMENSION_LABELS: dict[Dimension, str] = {
    Dimension.FUNDING_READINESS: "funding readiness",
    Dimension.COMPLIANCE_MATURITY: "compliance maturity",
    Dimension.DIGITAL_MATURITY: "digital maturity",
    Dimension.GOVERNANCE_MATURITY: "governance maturity",
    Dimension.MARKET_READINESS: "market readiness",
    Dimension.OPERATIONAL_EFFICIENCY: "operational efficiency",
}

BOTTLENECK_AREAS: dict[Dimension, str] = {
    Dimension.FUNDING_READINESS: "Financial Management",
    Dimension.COMPLIANCE_MATURITY: "Compliance",
    Dimension.GOVERNANCE_MATURITY: "Governance",
    Dimension.DIGITAL_MATURITY: "Digital Presence",
    Dimension.MARKET_READINESS: "Market Position",
    Dimension.OPERATIONAL_EFFICIENCY: "Operations",
}

BOTTLENECK_IMPACTS: dict[Dimension, str] = {
    Dimension.FUNDING_READINESS: "Limits ability to access bank loans and grants",
    Dimension.COMPLIANCE_MATURITY: "May result in penalties and missed business opportunities",
    Dimension.GOVERNANCE_MATURITY: "Reduces credibility with investors and partners",
    Dimension.DIGITAL_MATURITY: "Limits market reach and operational efficiency",
    Dimension.MARKET_READINESS: "Constrains growth potential and market access",
    Dimension.OPERATIONAL_EFFICIENCY: "Reduces profitability and scalability",
}

DEFAULT_IMPACT = "May impact business growth and opportunities"

RECOMMENDED_THEMES: dict[Dimension, str] = {
    Dimension.FUNDING_READINESS: "Improve financial documentation and track record",
    Dimension.COMPLIANCE_MATURITY: "Focus on compliance and regulatory requirements",
    Dimension.GOVERNANCE_MATURITY: "Strengthen governance and policy frameworks",
    Dimension.DIGITAL_MATURITY: "Enhance digital presence and capabilities",
    Dimension.MARKET_READINESS: "Clarify market positioning and strategy",
    Dimension.OPERATIONAL_EFFICIENCY: "Optimize operations and processes",
}

GROWTH_THEME = "Leverage strengths for growth and expansion"

SECTOR_CHALLENGE_THREATS: dict[str, str] = {
    "forex_access": "Limited access to foreign exchange may impact imports",
    "load_shedding": "Power supply issues (load shedding) affect operations",
    "import_dependence": "High import dependence creates supply chain risks",
    "competition": "Increasing market competition",
    "regulation": "Regulatory changes may impact operations",
}


# =============================================================================
# Remediation templates
# =============================================================================

REMEDIATION_TEMPLATES: tuple[RemediationTemplate, ...] = (
    RemediationTemplate(
        code="not_tax_registered",
        pattern="Not tax registered",
        action="Register for tax with ZRA",
        steps=(
            "Visit ZRA e-portal or nearest office",
            "Complete TPIN registration",
            "Obtain TIN certificate",
        ),
        effort="1-2 weeks",
        difficulty=Difficulty.EASY,
    ),
    RemediationTemplate(
        code="no_tax_clearance",
        pattern="No valid tax clearance certificate",
        action="Obtain a current Tax Clearance Certificate",
        steps=(
            "Register on ZRA portal",
            "File outstanding returns",
            "Request Tax Clearance",
        ),
        effort="2-4 weeks",
        difficulty=Difficulty.MEDIUM,
    ),
    RemediationTemplate(
        code="no_business_registration",
        pattern="No business registration",
        action="Register your business with PACRA",
        steps=(
            "Choose business structure",
            "Reserve company name",
            "Submit registration documents",
            "Pay registration fees",
        ),
        effort="2-3 weeks",
        difficulty=Difficulty.MEDIUM,
    ),
    RemediationTemplate(
        code="no_registration",
        pattern="No formal registration status",
        action="Formalize your business registration",
        steps=(
            "Decide on business structure (company, sole trader, cooperative)",
            "Gather required documents",
            "Register with PACRA",
        ),
        effort="2-4 weeks",
        difficulty=Difficulty.MEDIUM,
    ),
    RemediationTemplate(
        code="no_financial_records",
        pattern="No financial records available",
        action="Set up proper financial record keeping",
        steps=(
            "Choose accounting software (QuickBooks, Wave, Xero)",
            "Set up chart of accounts",
            "Record all transactions",
            "Generate monthly reports",
        ),
        effort="2-4 weeks",
        difficulty=Difficulty.MEDIUM,
    ),
    RemediationTemplate(
        code="no_website",
        pattern="No business website",
        action="Create a business website",
        steps=(
            "Register a domain name",
            "Choose a website builder or developer",
            "Create essential pages (About, Services, Contact)",
            "Optimize for search engines",
        ),
        effort="2-4 weeks",
        difficulty=Difficulty.MEDIUM,
    ),
    RemediationTemplate(
        code="no_social_media",
        pattern="No social media presence",
        action="Establish social media presence",
        steps=(
            "Create business profiles on key platforms (Facebook, LinkedIn, Instagram)",
            "Complete profile information",
            "Post regularly",
            "Engage with followers",
        ),
        effort="1-2 weeks",
        difficulty=Difficulty.EASY,
    ),
    RemediationTemplate(
        code="no_board",
        pattern="No board or advisory structure",
        action="Establish advisory or governance structure",
        steps=(
            "Identify potential advisors or board members",
            "Define roles and expectations",
            "Formalize through board resolution or advisory agreement",
        ),
        effort="2-3 months",
        difficulty=Difficulty.MEDIUM,
    ),
    RemediationTemplate(
        code="no_written_policies",
        pattern="No written governance policies",
        action="Develop basic governance policies",
        steps=(
            "Start with HR and finance policies",
            "Use templates or consult with professionals",
            "Get policies approved and communicated",
        ),
        effort="1-2 months",
        difficulty=Difficulty.MEDIUM,
    ),
)

GENERIC_REMEDIATION_STEPS: tuple[str, ...] = (
    "Assess current situation",
    "Develop improvement plan",
    "Implement changes",
    "Monitor progress",
)

GENERIC_IMPLEMENTATION_STEPS: tuple[str, ...] = (
    "Research best practices and requirements",
    "Create an implementation plan",
    "Allocate resources and timeline",
    "Execute and monitor progress",
)


def weights_for(dimension: Dimension) -> dict[str, int]:
    """Weight table for a dimension as a key -> weight mapping."""
    return {entry.key: entry.weight for entry in WEIGHT_TABLES[dimension]}
