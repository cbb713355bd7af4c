"""Data coverage assessment.

Counts how much optional evidence was supplied so readers of a diagnosis
know how far to trust it.
"""

from app.core.diagnostics.types import DataCoverageLevel, DiagnosticsInput

COMPREHENSIVE_AT = 8
PARTIAL_AT = 4
MAX_DOCUMENT_POINTS = 3


def assess_data_coverage(data: DiagnosticsInput) -> tuple[DataCoverageLevel, list[str]]:
    """
    Classify input coverage and list the sections actually supplied.

    Points: 1 for the profile, 2 for financial data with a revenue figure
    (1 without), 1 per document up to 3, 1 each for behavior and benchmark,
    plus 1 per populated core profile field (name, sector, tenure,
    registration status).

    Returns:
        Tuple of (coverage level, data source names)
    """
    sources = ["profile"]
    coverage = 1

    if data.financial_data is not None:
        sources.append("financial_data")
        coverage += 2 if data.financial_data.revenue_year_1 else 1

    if data.documents:
        sources.append("documents")
        coverage += min(len(data.documents), MAX_DOCUMENT_POINTS)

    if data.platform_behavior is not None:
        sources.append("platform_behavior")
        coverage += 1

    if data.sector_benchmark is not None:
        sources.append("sector_benchmark")
        coverage += 1

    profile = data.profile
    coverage += sum(
        1
        for value in (
            profile.business_name,
            profile.sector,
            profile.years_in_operation,
            profile.registration_status,
        )
        if value
    )

    if coverage >= COMPREHENSIVE_AT:
        level = DataCoverageLevel.COMPREHENSIVE
    elif coverage >= PARTIAL_AT:
        level = DataCoverageLevel.PARTIAL
    else:
        level = DataCoverageLevel.MINIMAL

    return level, sources
