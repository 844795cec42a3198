# scope_intake/scope/client_summary.py
"""Client-facing one-page summary derived from a ScopeDocument."""

from html import escape

from pydantic import BaseModel, ConfigDict

from scope_intake.config.schema import PricingConfig

from .markdown import format_date
from .schemas import ScopeDocument

KEY_FEATURES_PER_GROUP = 3


class SummaryOverview(BaseModel):
    model_config = ConfigDict(frozen=True)

    website_type: str
    primary_goal: str
    target_audience: str
    recommended_package: str


class SummaryInvestment(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_investment: int
    first_year_investment: int
    monthly_hosting: int
    estimated_timeline: str


class ClientSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    project_name: str
    client_name: str
    summary_date: str
    overview: SummaryOverview
    key_features: tuple[str, ...]
    investment: SummaryInvestment
    next_steps: tuple[str, ...]
    agency_name: str


def build_client_summary(doc: ScopeDocument, agency_name: str | None = None) -> ClientSummary:
    """Summarize the document; the summary date is the document's generation date."""
    agency = agency_name or PricingConfig().agency_name
    breakdown = doc.features_breakdown

    key_features = list(breakdown.base_package.included_features[:KEY_FEATURES_PER_GROUP])
    key_features.extend(f.name for f in breakdown.add_on_features[:KEY_FEATURES_PER_GROUP])

    if doc.content_strategy.content_provider == "client":
        content_step = "Begin content preparation: gather all content, images, and copy"
    else:
        content_step = f"Begin content preparation: coordinate with {agency} on content needs"

    return ClientSummary(
        project_name=doc.executive_summary.project_name,
        client_name=doc.client_information.full_name,
        summary_date=format_date(doc.generated_at),
        overview=SummaryOverview(
            website_type=doc.executive_summary.website_type,
            primary_goal=doc.executive_summary.primary_goal,
            target_audience=doc.executive_summary.target_audience,
            recommended_package=doc.project_classification.recommended_package,
        ),
        key_features=tuple(key_features),
        investment=SummaryInvestment(
            total_investment=doc.investment_summary.total_project_investment,
            first_year_investment=doc.investment_summary.total_first_year_investment,
            monthly_hosting=doc.investment_summary.hosting.monthly_price,
            estimated_timeline=doc.timeline.estimated_duration,
        ),
        next_steps=(
            "Review this summary and the detailed SCOPE document",
            "Sign the project contract",
            "Submit initial deposit (50%)",
            content_step,
            "Schedule kickoff meeting to finalize project timeline",
        ),
        agency_name=agency,
    )


_STYLE = """
    body { font-family: -apple-system, 'Segoe UI', Roboto, sans-serif; line-height: 1.6;
           color: #1f2937; max-width: 800px; margin: 0 auto; padding: 60px; }
    .header { text-align: center; border-bottom: 3px solid #2563eb; padding-bottom: 40px; }
    .logo { font-size: 24px; font-weight: 700; color: #2563eb; }
    h2 { font-size: 20px; border-bottom: 2px solid #e5e7eb; padding-bottom: 8px; }
    .overview, .investment { background: #f9fafb; padding: 24px; border-radius: 8px; }
    .label { font-size: 12px; font-weight: 600; text-transform: uppercase; color: #6b7280; }
    .row { display: flex; justify-content: space-between; padding: 12px 0; }
    .total { color: #2563eb; font-size: 24px; font-weight: 600; }
"""


def render_client_summary_html(summary: ClientSummary) -> str:
    """Standalone HTML page for the summary. All text is escaped."""
    e = escape
    overview = summary.overview
    investment = summary.investment

    features = "\n".join(f"      <li>{e(name)}</li>" for name in summary.key_features)
    steps = "\n".join(f"      <li>{e(step)}</li>" for step in summary.next_steps)

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <title>{e(summary.project_name)} - Project Summary</title>
  <style>{_STYLE}  </style>
</head>
<body>
  <div class="header">
    <div class="logo">{e(summary.agency_name)}</div>
    <h1>{e(summary.project_name)}</h1>
    <div class="subtitle">Prepared for {e(summary.client_name)} on {e(summary.summary_date)}</div>
  </div>

  <h2>Project Overview</h2>
  <div class="overview">
    <div class="label">Website Type</div><div>{e(overview.website_type)}</div>
    <div class="label">Primary Goal</div><div>{e(overview.primary_goal)}</div>
    <div class="label">Target Audience</div><div>{e(overview.target_audience)}</div>
    <div class="label">Recommended Package</div><div>{e(overview.recommended_package.title())}</div>
  </div>

  <h2>Key Features</h2>
  <ul class="features">
{features}
  </ul>

  <h2>Investment Summary</h2>
  <div class="investment">
    <div class="row"><span>Estimated Timeline</span><span>{e(investment.estimated_timeline)}</span></div>
    <div class="row"><span>Monthly Hosting</span><span>${investment.monthly_hosting:,}/month</span></div>
    <div class="row"><span>First Year Total</span><span>${investment.first_year_investment:,}</span></div>
    <div class="row"><span>Total Project Investment</span><span class="total">${investment.total_investment:,}</span></div>
  </div>

  <h2>Next Steps</h2>
  <ol class="next-steps">
{steps}
  </ol>
</body>
</html>
"""
