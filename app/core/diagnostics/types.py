"""Pydantic models for the business-health diagnostics engine."""

from datetime import date, datetime
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Enums
# =============================================================================


class Dimension(str, Enum):
    """The six scoring dimensions, in canonical order."""

    FUNDING_READINESS = "funding_readiness"
    COMPLIANCE_MATURITY = "compliance_maturity"
    DIGITAL_MATURITY = "digital_maturity"
    GOVERNANCE_MATURITY = "governance_maturity"
    MARKET_READINESS = "market_readiness"
    OPERATIONAL_EFFICIENCY = "operational_efficiency"


class RegistrationStatus(str, Enum):
    SOLE_TRADER = "sole_trader"
    COMPANY = "company"
    COOPERATIVE = "cooperative"
    PARTNERSHIP = "partnership"
    TRUST = "trust"
    NGO = "ngo"
    OTHER = "other"


class TaxStatus(str, Enum):
    REGISTERED = "registered"
    VAT = "vat"
    PAYE = "paye"
    NOT_REGISTERED = "not_registered"


class BusinessModelType(str, Enum):
    B2B = "B2B"
    B2C = "B2C"
    B2G = "B2G"
    MIXED = "mixed"


class DocumentType(str, Enum):
    REGISTRATION_CERTIFICATE = "registration_certificate"
    TAX_CLEARANCE = "tax_clearance"
    TIN = "tin"
    FINANCIAL_STATEMENTS = "financial_statements"
    INSURANCE_POLICY = "insurance_policy"
    CONTRACT_MOU = "contract_mou"
    BUSINESS_PLAN = "business_plan"
    PITCH_DECK = "pitch_deck"
    STRATEGY_DOCUMENT = "strategy_document"
    PROJECT_PROPOSAL = "project_proposal"


class HealthBand(str, Enum):
    """Overall health band derived from the mean dimension score."""

    CRITICAL = "critical"  # <= 20
    DEVELOPING = "developing"  # <= 40
    EMERGING = "emerging"  # <= 60
    ESTABLISHED = "established"  # <= 80
    THRIVING = "thriving"  # > 80


class BusinessStage(str, Enum):
    EARLY = "early"
    GROWTH = "growth"
    SCALE = "scale"


class DataCoverageLevel(str, Enum):
    MINIMAL = "minimal"
    PARTIAL = "partial"
    COMPREHENSIVE = "comprehensive"


class Severity(str, Enum):
    """Bottleneck severity. CRITICAL is reserved; no current rule emits it."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class TimelineCategory(str, Enum):
    NOW = "NOW"
    NEXT = "NEXT"
    LATER = "LATER"


class PartnerType(str, Enum):
    BANK = "bank"
    INVESTOR = "investor"
    DONOR = "donor"
    CONSULTANT = "consultant"
    CORPORATE = "corporate"
    TRAINING_PROVIDER = "training_provider"
    ACCELERATOR = "accelerator"
    GOVERNMENT = "government"


class OpportunityType(str, Enum):
    GRANT = "grant"
    TENDER = "tender"
    LOAN = "loan"
    INVESTMENT = "investment"
    TRAINING = "training"
    MENTORSHIP = "mentorship"
    PROCUREMENT = "procurement"


Importance = Literal["low", "medium", "high"]
DataQuality = Literal["low", "medium", "high"]


# =============================================================================
# Input records
# =============================================================================


class BusinessProfile(BaseModel):
    """SME profile as maintained by the profile-management service."""

    id: str = Field(..., description="Profile (user) identifier")
    email: Optional[str] = None
    business_name: Optional[str] = None
    sector: Optional[str] = None
    sub_sector: Optional[str] = None
    country: str = "Zambia"
    city: Optional[str] = None
    operating_regions: Optional[list[str]] = None
    years_in_operation: Optional[int] = Field(None, ge=0)

    employee_count_fulltime: Optional[int] = Field(None, ge=0)
    employee_count_parttime: Optional[int] = Field(None, ge=0)
    employee_count_casual: Optional[int] = Field(None, ge=0)

    registration_status: Optional[RegistrationStatus] = None
    registration_authority: Optional[str] = None
    registration_number: Optional[str] = None
    tax_status: Optional[list[TaxStatus]] = None

    female_ownership_pct: Optional[float] = Field(None, ge=0, le=100)
    youth_ownership_pct: Optional[float] = Field(None, ge=0, le=100)
    local_ownership_pct: Optional[float] = Field(None, ge=0, le=100)

    business_model: Optional[list[BusinessModelType]] = None
    revenue_model: Optional[list[str]] = None

    website_url: Optional[str] = None
    social_media_links: Optional[dict[str, Optional[str]]] = None
    online_store_presence: Optional[list[str]] = None

    has_board_of_directors: Optional[bool] = None
    has_advisory_board: Optional[bool] = None
    has_hr_policy: Optional[bool] = None
    has_finance_policy: Optional[bool] = None
    has_procurement_policy: Optional[bool] = None
    has_risk_policy: Optional[bool] = None
    annual_audits_done: Optional[bool] = None
    tax_returns_filed_on_time: Optional[Literal["yes", "no", "not_sure"]] = None

    uses_erp: Optional[bool] = None
    uses_pos: Optional[bool] = None
    uses_accounting_software: Optional[bool] = None


class FinancialSnapshot(BaseModel):
    """Self-reported financial data. Year 1 is the most recent year."""

    revenue_year_1: Optional[float] = None
    revenue_year_2: Optional[float] = None
    revenue_year_3: Optional[float] = None
    revenue_range: Optional[str] = None

    profit_year_1: Optional[float] = None
    profit_year_2: Optional[float] = None
    profit_year_3: Optional[float] = None

    cash_flow_positive: Optional[bool] = None

    avg_invoice_size: Optional[float] = None
    payment_terms_days: Optional[int] = Field(None, ge=0)
    top_3_clients_revenue_pct: Optional[float] = Field(None, ge=0, le=100)

    existing_loans_count: Optional[int] = Field(None, ge=0)
    total_debt_amount: Optional[float] = None
    has_defaults_or_arrears: Optional[bool] = None

    currency: str = "ZMW"
    updated_at: Optional[str] = Field(None, description="Last-modified timestamp (opaque)")


class DocumentRecord(BaseModel):
    """Uploaded evidence. Only the type and validity matter to scoring."""

    id: Optional[str] = None
    document_type: DocumentType
    file_name: Optional[str] = None
    verified: bool = False
    expiry_date: Optional[date] = None


class PlatformBehavior(BaseModel):
    """Engagement telemetry collected by the platform."""

    grant_applications_count: int = 0
    tender_applications_count: int = 0
    finance_applications_count: int = 0

    login_count_30d: int = 0
    profile_completion_pct: float = 0
    training_courses_completed: int = 0

    message_response_rate_pct: Optional[float] = None
    rfq_response_rate_pct: Optional[float] = None
    avg_response_time_hours: Optional[float] = None

    avg_rating: Optional[float] = None
    review_count: int = 0

    updated_at: Optional[str] = Field(None, description="Last-modified timestamp (opaque)")


class SectorBenchmark(BaseModel):
    """Reference data for a sector, used only for opportunities and threats."""

    sector: str
    sub_sector: Optional[str] = None
    country: str = "Zambia"

    avg_revenue_growth_pct: Optional[float] = None
    median_employee_count: Optional[float] = None
    avg_profit_margin_pct: Optional[float] = None
    avg_digital_maturity_score: Optional[float] = None
    avg_compliance_rate_pct: Optional[float] = None

    common_challenges: Optional[list[str]] = None
    growth_potential: Optional[Literal["high", "medium", "low"]] = None
    market_saturation: Optional[Literal["high", "medium", "low"]] = None


class DiagnosticsInput(BaseModel):
    """Everything the engine reads for one diagnosis."""

    profile: BusinessProfile
    financial_data: Optional[FinancialSnapshot] = None
    documents: Optional[list[DocumentRecord]] = None
    platform_behavior: Optional[PlatformBehavior] = None
    sector_benchmark: Optional[SectorBenchmark] = None
    as_of: Optional[datetime] = Field(
        None, description="Reference time for document expiry and metadata"
    )


# =============================================================================
# Output records
# =============================================================================


class ScoreExplanation(BaseModel):
    """Per-dimension score with the evidence behind it."""

    score: int = Field(..., ge=0, le=100)
    band: str
    factors_positive: list[str] = Field(default_factory=list)
    factors_negative: list[str] = Field(default_factory=list)
    data_quality: DataQuality
    recommendations: list[str] = Field(default_factory=list)


class DiagnosticsScores(BaseModel):
    funding_readiness: int = Field(..., ge=0, le=100)
    compliance_maturity: int = Field(..., ge=0, le=100)
    digital_maturity: int = Field(..., ge=0, le=100)
    governance_maturity: int = Field(..., ge=0, le=100)
    market_readiness: int = Field(..., ge=0, le=100)
    operational_efficiency: int = Field(..., ge=0, le=100)

    def by_dimension(self) -> dict[Dimension, int]:
        """Scores keyed by dimension, in canonical order."""
        return {dim: getattr(self, dim.value) for dim in Dimension}

    def mean(self) -> float:
        values = list(self.by_dimension().values())
        return sum(values) / len(values)


class ScoreExplanations(BaseModel):
    funding_readiness: ScoreExplanation
    compliance_maturity: ScoreExplanation
    digital_maturity: ScoreExplanation
    governance_maturity: ScoreExplanation
    market_readiness: ScoreExplanation
    operational_efficiency: ScoreExplanation

    def by_dimension(self) -> dict[Dimension, ScoreExplanation]:
        return {dim: getattr(self, dim.value) for dim in Dimension}


class SWOTItem(BaseModel):
    id: str
    text: str
    category: Optional[str] = None
    importance: Importance = "low"


class SWOTAnalysis(BaseModel):
    strengths: list[SWOTItem] = Field(default_factory=list)
    weaknesses: list[SWOTItem] = Field(default_factory=list)
    opportunities: list[SWOTItem] = Field(default_factory=list)
    threats: list[SWOTItem] = Field(default_factory=list)


class Bottleneck(BaseModel):
    """A negative evidence item from a low-scoring dimension."""

    id: str
    area: str = Field(..., description="Functional area, e.g. 'Compliance'")
    severity: Severity
    description: str
    impact: str
    data_source: Optional[Dimension] = Field(None, description="Originating dimension")
    reason_code: Optional[str] = Field(None, description="Stable code of the evidence")


class Recommendation(BaseModel):
    """A prioritized action item. Priority 1 is the first emitted."""

    id: str
    priority: int = Field(..., ge=1)
    area: str
    action: str
    why: str
    how: list[str] = Field(default_factory=list)
    estimated_time: str
    difficulty: Difficulty
    timeline_category: TimelineCategory
    related_bottleneck_id: Optional[str] = None


class RecommendedPartner(BaseModel):
    partner_type: PartnerType
    partner_id: str
    name: str
    reason: str
    suggested_product: Optional[str] = None
    fit_score: int = Field(..., ge=0, le=100)


class OpportunityAmount(BaseModel):
    min: Optional[float] = None
    max: Optional[float] = None
    currency: str = "ZMW"


class SuggestedOpportunity(BaseModel):
    id: str
    type: OpportunityType
    title: str
    description: str
    provider: str
    amount: Optional[OpportunityAmount] = None
    fit_score: int = Field(..., ge=0, le=100)
    requirements: list[str] = Field(default_factory=list)


class OverallSummary(BaseModel):
    health_band: HealthBand
    business_stage: BusinessStage
    headline: str
    key_strengths: list[str] = Field(default_factory=list)
    urgent_gaps: list[str] = Field(default_factory=list)
    recommended_themes: list[str] = Field(default_factory=list)
    narrative: str = ""


class DiagnosticsRunMeta(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    last_updated: datetime
    data_coverage_level: DataCoverageLevel
    data_sources_used: list[str] = Field(default_factory=list)
    model_version: str
    prompt_version: str


class DiagnosticsOutput(BaseModel):
    """Complete, self-contained result of one diagnosis."""

    overall_summary: OverallSummary
    swot_analysis: SWOTAnalysis
    scores: DiagnosticsScores
    score_explanations: ScoreExplanations
    bottlenecks: list[Bottleneck] = Field(default_factory=list)
    recommendations: list[Recommendation] = Field(default_factory=list)
    recommended_partners: list[RecommendedPartner] = Field(default_factory=list)
    suggested_opportunities: list[SuggestedOpportunity] = Field(default_factory=list)
    meta: DiagnosticsRunMeta


class DiagnosticsRun(BaseModel):
    """Persistence-ready, immutable snapshot of one diagnosis.

    Timestamps are assigned by the storage layer.
    """

    model_config = ConfigDict(protected_namespaces=())

    id: str
    user_id: str

    model_version: str
    prompt_version: str
    input_hash: str

    data_coverage_level: DataCoverageLevel
    data_sources_used: list[str] = Field(default_factory=list)

    funding_readiness_score: int
    compliance_maturity_score: int
    governance_maturity_score: int
    digital_maturity_score: int
    market_readiness_score: int
    operational_efficiency_score: int

    overall_health_band: HealthBand
    business_stage: BusinessStage

    swot_analysis: SWOTAnalysis
    bottlenecks: list[Bottleneck] = Field(default_factory=list)
    recommendations: list[Recommendation] = Field(default_factory=list)
    recommended_partners: list[RecommendedPartner] = Field(default_factory=list)
    suggested_opportunities: list[SuggestedOpportunity] = Field(default_factory=list)

    narrative_summary: str
    score_explanations: ScoreExplanations

    status: Literal["pending", "processing", "completed", "failed"] = "completed"
    error_message: Optional[str] = None
