"""Pytest configuration and fixtures."""

import os
from datetime import date, datetime, timezone

import pytest

from app.core.diagnostics.types import (
    BusinessProfile,
    DiagnosticsInput,
    DocumentRecord,
    FinancialSnapshot,
    PlatformBehavior,
)

AS_OF = datetime(2025, 11, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture(scope="session", autouse=True)
def setup_test_env():
    """Set up test environment variables."""
    os.environ["SUPABASE_URL"] = "https://test.supabase.co"
    os.environ["SUPABASE_SERVICE_ROLE_KEY"] = "test-key"
    os.environ["DIAGNOSTICS_ENV"] = "test"


@pytest.fixture
def minimal_input() -> DiagnosticsInput:
    """Profile with nothing but an id: unregistered, no financials, no documents."""
    return DiagnosticsInput(profile=BusinessProfile(id="sme-minimal"), as_of=AS_OF)


@pytest.fixture
def established_profile() -> BusinessProfile:
    return BusinessProfile(
        id="sme-42",
        business_name="Kafue Agro Ltd",
        sector="Agriculture",
        sub_sector="Horticulture",
        city="Lusaka",
        operating_regions=["Lusaka", "Central", "Copperbelt"],
        years_in_operation=6,
        employee_count_fulltime=18,
        employee_count_parttime=4,
        employee_count_casual=2,
        registration_status="company",
        registration_authority="PACRA",
        tax_status=["registered", "vat"],
        business_model=["B2B", "B2G"],
        revenue_model=["product_sales"],
        website_url="https://kafueagro.co.zm",
        social_media_links={"facebook": "fb.com/kafueagro", "linkedin": "linkedin.com/kafueagro"},
        online_store_presence=["own_site"],
        has_board_of_directors=True,
        has_advisory_board=False,
        has_hr_policy=True,
        has_finance_policy=True,
        has_procurement_policy=False,
        has_risk_policy=False,
        annual_audits_done=True,
        tax_returns_filed_on_time="yes",
        uses_erp=False,
        uses_pos=True,
        uses_accounting_software=True,
    )


@pytest.fixture
def established_input(established_profile) -> DiagnosticsInput:
    """A well-documented, registered, profitable business."""
    return DiagnosticsInput(
        profile=established_profile,
        financial_data=FinancialSnapshot(
            revenue_year_1=1_200_000,
            revenue_year_2=1_000_000,
            profit_year_1=150_000,
            cash_flow_positive=True,
            payment_terms_days=45,
            top_3_clients_revenue_pct=35,
            existing_loans_count=1,
            has_defaults_or_arrears=False,
            updated_at="2025-06-01T00:00:00Z",
        ),
        documents=[
            DocumentRecord(document_type="tax_clearance", expiry_date=date(2026, 3, 31)),
            DocumentRecord(document_type="registration_certificate"),
            DocumentRecord(document_type="financial_statements"),
        ],
        platform_behavior=PlatformBehavior(
            login_count_30d=12,
            profile_completion_pct=90,
            avg_response_time_hours=6,
            updated_at="2025-10-20T08:00:00Z",
        ),
        as_of=AS_OF,
    )
