"""Business-health diagnostics engine.

Scores an SME across 6 dimensions:
- Funding readiness: could a lender underwrite this business today
- Compliance maturity: registration, tax and licensing posture
- Digital maturity: online presence and tool adoption
- Governance maturity: boards, policies and audits
- Market readiness: customers, concentration and reputation
- Operational efficiency: staffing, systems and responsiveness

and derives a health band, growth stage, SWOT, bottlenecks, a prioritized
action plan, partner/opportunity matches and a narrative summary.

Usage:
    from app.core.diagnostics import DiagnosticsInput, run_diagnosis

    output = run_diagnosis(DiagnosticsInput(profile={"id": "sme-1"}))
    print(output.overall_summary.headline)
"""

from app.core.diagnostics.engine import (
    compute_input_hash,
    create_diagnostics_run,
    run_diagnosis,
)
from app.core.diagnostics.tables import MODEL_VERSION, PROMPT_VERSION, TABLES_VERSION
from app.core.diagnostics.types import (
    DiagnosticsInput,
    DiagnosticsOutput,
    DiagnosticsRun,
    DiagnosticsScores,
    Dimension,
)

__all__ = [
    "run_diagnosis",
    "create_diagnostics_run",
    "compute_input_hash",
    "DiagnosticsInput",
    "DiagnosticsOutput",
    "DiagnosticsRun",
    "DiagnosticsScores",
    "Dimension",
    "MODEL_VERSION",
    "PROMPT_VERSION",
    "TABLES_VERSION",
]
