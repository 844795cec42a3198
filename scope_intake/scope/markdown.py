# scope_intake/scope/markdown.py
"""
Scope renderer for converting ScopeDocument to human-readable markdown.

Output is a header, one `## Section N: Title` block per section and a
footer, joined by horizontal rules.
"""

from scope_intake.config.schema import PricingConfig

from .schemas import (
    BrandAssets,
    BusinessContext,
    ClientInformation,
    ContentStrategy,
    DesignDirection,
    ExecutiveSummary,
    FeaturesBreakdown,
    InvestmentSummary,
    MediaElements,
    ProjectClassification,
    ScopeDocument,
    SupportPlan,
    TechnicalSpecifications,
    Timeline,
    ValidationOutcomes,
)

SECTION_SEPARATOR = "\n\n---\n\n"


def format_date(value) -> str:
    """'March 5, 2026' style date."""
    return f"{value.strftime('%B')} {value.day}, {value.year}"


def _money(amount: float) -> str:
    if float(amount).is_integer():
        return f"${int(amount):,}"
    return f"${amount:,.2f}"


def _yes_no(flag: bool, marks: bool = False) -> str:
    if marks:
        return "Yes ✓" if flag else "No ✗"
    return "Yes" if flag else "No"


def _bullets(items, empty: str | None = None) -> list[str]:
    lines = [f"- {item}" for item in items]
    if not lines and empty:
        lines.append(f"- {empty}")
    return lines


class ScopeRenderer:
    """
    Converts ScopeDocument to structured markdown.

    Format:
        # PROJECT SCOPE DOCUMENT
        (generated date, version, conversation id)
        ---
        ## Section 1: Executive Summary
        ...
        ---
        ## Section 14: Validation Outcomes
        ---
        ## Document Information
    """

    def __init__(self, agency_name: str | None = None) -> None:
        self.agency_name = agency_name or PricingConfig().agency_name

    def render(self, doc: ScopeDocument) -> str:
        """
        Render ScopeDocument to markdown string.

        Args:
            doc: Synthesized scope document

        Returns:
            Formatted markdown string
        """
        blocks = [
            self._render_header(doc),
            self._section1(doc.executive_summary),
            self._section2(doc.project_classification),
            self._section3(doc.client_information),
            self._section4(doc.business_context),
            self._section5(doc.brand_assets),
            self._section6(doc.content_strategy),
            self._section7(doc.technical_specifications),
            self._section8(doc.media_elements),
            self._section9(doc.design_direction),
            self._section10(doc.features_breakdown),
            self._section11(doc.support_plan),
            self._section12(doc.timeline),
            self._section13(doc.investment_summary),
            self._section14(doc.validation_outcomes),
            self._render_footer(doc),
        ]
        return SECTION_SEPARATOR.join(blocks)

    def _render_header(self, doc: ScopeDocument) -> str:
        lines = ["# PROJECT SCOPE DOCUMENT", ""]
        lines.append(f"**Generated:** {format_date(doc.generated_at)}  ")
        lines.append(f"**Version:** {doc.version}  ")
        lines.append(f"**Conversation ID:** {doc.conversation_id}")
        lines.append("")
        lines.append("> **FOR DEVELOPER USE**  ")
        lines.append("> This document contains complete technical specifications for building this project.  ")
        lines.append("> All requirements have been gathered and validated with the client.")
        return "\n".join(lines)

    def _section1(self, section: ExecutiveSummary) -> str:
        lines = ["## Section 1: Executive Summary", ""]
        lines.append(f"**Project Name:** {section.project_name}  ")
        lines.append(f"**Website Type:** {section.website_type}  ")
        lines.append(f"**Primary Goal:** {section.primary_goal}  ")
        lines.append(f"**Target Audience:** {section.target_audience}")
        lines.append("")
        lines.append("### Overview")
        lines.append("")
        lines.append(section.summary_text)
        lines.append("")
        lines.append(f"**Key Differentiator:** {section.key_differentiator}")
        return "\n".join(lines)

    def _section2(self, section: ProjectClassification) -> str:
        lines = ["## Section 2: Project Classification", ""]
        lines.append(f"**Website Type:** {section.website_type}  ")
        lines.append(f"**Industry:** {section.industry}  ")
        if section.business_model:
            lines.append(f"**Business Model:** {section.business_model}  ")
        lines.append(f"**Project Complexity:** {section.project_complexity.upper()} (score {section.complexity_score})  ")
        lines.append(
            f"**Recommended Package:** {section.recommended_package.upper()} "
            f"({_money(section.package_price)})"
        )
        lines.append("")
        lines.append("### Complexity Rationale")
        lines.append("")
        lines.append(section.complexity_rationale)
        return "\n".join(lines)

    def _section3(self, section: ClientInformation) -> str:
        lines = ["## Section 3: Client Information", ""]
        lines.append(f"**Name:** {section.full_name}  ")
        lines.append(f"**Email:** {section.email}  ")
        lines.append(f"**Phone:** {section.phone or 'Not provided'}  ")
        lines.append(f"**Company:** {section.company_name}")
        if section.decision_maker_role:
            lines.append(f"**Role:** {section.decision_maker_role}")
        if section.preferred_contact_method:
            lines.append(f"**Preferred Contact:** {section.preferred_contact_method}")
        return "\n".join(lines)

    def _section4(self, section: BusinessContext) -> str:
        lines = ["## Section 4: Business Context", ""]
        lines.extend(["### Company Overview", "", section.company_overview, ""])
        lines.extend(["### Target Audience", ""])
        lines.append(f"**Description:** {section.target_audience.description}  ")
        lines.append(f"**Technical Level:** {section.target_audience.technical_level}  ")
        lines.append("**Primary Needs:**")
        lines.extend(_bullets(section.target_audience.primary_needs, "To be determined"))
        lines.append("")
        lines.extend(["### Primary Goal", "", section.primary_goal, ""])
        lines.extend(["### Success Metrics", ""])
        for metric in section.success_metrics:
            lines.append(f"**{metric.metric}**  ")
            if metric.target:
                lines.append(f"Target: {metric.target}  ")
            lines.append(f"Measurement: {metric.measurement}")
            lines.append("")
        lines.extend(["### Value Proposition", "", section.value_proposition, ""])
        lines.extend(["### Pain Points", ""])
        lines.extend(_bullets(section.pain_points, "To be identified during discovery"))
        return "\n".join(lines)

    def _section5(self, section: BrandAssets) -> str:
        assets = section.existing_assets
        lines = ["## Section 5: Brand Assets & Identity", "", "### Existing Assets", ""]
        lines.append(f"- **Logo:** {_yes_no(assets.logo, marks=True)}")
        lines.append(f"- **Color Palette:** {_yes_no(assets.color_palette, marks=True)}")
        lines.append(f"- **Fonts:** {_yes_no(assets.fonts, marks=True)}")
        lines.append(f"- **Style Guide:** {_yes_no(assets.style_guide, marks=True)}")
        lines.append(f"- **Imagery:** {_yes_no(assets.imagery, marks=True)}")
        lines.append("")
        lines.extend(["### Brand Style", "", section.brand_style, ""])
        lines.extend(["### Assets Needing Creation", ""])
        lines.extend(_bullets(section.what_needs_creation, "All assets provided"))
        if section.inspiration_references:
            lines.extend(["", "### Inspiration References", ""])
            lines.extend(_bullets(section.inspiration_references))
        return "\n".join(lines)

    def _section6(self, section: ContentStrategy) -> str:
        lines = ["## Section 6: Content Strategy", ""]
        lines.append(f"**Content Provider:** {section.content_provider.upper()}  ")
        lines.append(f"**Content Readiness:** {section.content_readiness.upper()}  ")
        lines.append(f"**Update Frequency:** {section.update_frequency.upper()}")
        lines.append("")
        lines.extend(["### Maintenance Plan", "", section.maintenance_plan, ""])
        lines.extend(["### Content Types", ""])
        lines.extend(_bullets(section.content_types))
        lines.extend(["", "### Additional Services", ""])
        lines.append(f"- **Copywriting Needed:** {_yes_no(section.copywriting_needed)}")
        lines.append(f"- **Photography Needed:** {_yes_no(section.photography_needed)}")
        return "\n".join(lines)

    def _section7(self, section: TechnicalSpecifications) -> str:
        lines = ["## Section 7: Technical Specifications", "", "### Authentication", ""]
        auth = section.authentication
        if auth.required:
            lines.append("**Required:** Yes  ")
            lines.append(f"**Method:** {(auth.method or '').replace('_', ' ').upper()}")
            if auth.user_roles:
                lines.append(f"**User Roles:** {', '.join(auth.user_roles)}")
        else:
            lines.append("**Required:** No")
        lines.append("")

        lines.extend(["### Content Management", ""])
        cms = section.content_management
        if cms.required:
            lines.append("**Required:** Yes  ")
            lines.append(f"**Type:** {(cms.type or 'To be determined').upper()}  ")
            lines.append(f"**Update Frequency:** {cms.update_frequency or 'To be determined'}")
        else:
            lines.append("**Required:** No")
        lines.append("")

        lines.extend(["### Search Functionality", ""])
        lines.append(f"**Required:** {_yes_no(section.search_required)}")

        if section.website_type_features:
            lines.extend(["", "### Website-Type-Specific Features", ""])
            for name, value in section.website_type_features.items():
                label = name.replace("_", " ").title()
                if isinstance(value, dict):
                    lines.append(f"**{label}**")
                    for key, item in value.items():
                        lines.append(f"- {key.replace('_', ' ')}: {self._plain(item)}")
                else:
                    lines.append(f"- **{label}:** {self._plain(value)}")

        if section.integrations:
            lines.extend(["", "### Integrations", ""])
            lines.extend(_bullets(section.integrations))

        if section.compliance.required:
            lines.extend(["", "### Compliance Requirements", ""])
            lines.extend(_bullets(section.compliance.required))

        lines.extend(["", "### Security", ""])
        lines.append("- **SSL Required:** Yes (included)")
        lines.extend(_bullets(section.security.additional_requirements))

        perf = section.performance
        lines.extend(["", "### Performance Requirements", ""])
        lines.append(f"**Expected Traffic:** {perf.expected_traffic}")
        lines.append("")
        lines.append("**Critical Metrics:**")
        lines.extend(_bullets(perf.critical_metrics))
        lines.append("")
        lines.append(f"**Caching Strategy:** {perf.caching_strategy}")
        return "\n".join(lines)

    def _section8(self, section: MediaElements) -> str:
        lines = ["## Section 8: Media & Interactive Elements", ""]
        media = (
            ("Video", section.video),
            ("Image Galleries", section.galleries),
            ("Animations", section.animations),
            ("Audio", section.audio),
            ("Maps", section.maps),
        )
        rendered_any = False
        for title, requirement in media:
            if not requirement.required:
                continue
            rendered_any = True
            lines.extend([f"### {title}", ""])
            for key, value in requirement.details.items():
                lines.append(f"**{key.replace('_', ' ').title()}:** {self._plain(value)}  ")
            lines.append("")
        if section.interactive_elements:
            rendered_any = True
            lines.extend(["### Interactive Elements", ""])
            lines.extend(_bullets(section.interactive_elements))
        if not rendered_any:
            lines.append("No special media or interactive elements required.")
        return "\n".join(lines).rstrip()

    def _section9(self, section: DesignDirection) -> str:
        lines = ["## Section 9: Design Direction", ""]
        lines.extend(["### Overall Style", "", section.overall_style, ""])
        lines.extend(["### Color Scheme", "", f"**Direction:** {section.color_direction}", ""])
        lines.extend(["### Typography", "", f"**Readability:** {section.typography_readability}", ""])
        lines.extend(["### Layout", "", f"**Whitespace:** {section.whitespace}", ""])
        if section.references:
            lines.extend(["### Design References", ""])
            lines.extend(_bullets(section.references))
            lines.append("")
        lines.extend(["### Design Priorities", ""])
        lines.extend(_bullets(section.design_priorities))
        return "\n".join(lines)

    def _section10(self, section: FeaturesBreakdown) -> str:
        base = section.base_package
        lines = ["## Section 10: Features & Functionality Breakdown", "", "### Base Package", ""]
        lines.append(f"**{base.name} Package** - {_money(base.price)}")
        lines.append("")
        lines.append("Included features:")
        lines.extend(_bullets(base.included_features))
        lines.extend(["", "### Add-On Features", ""])
        if section.add_on_features:
            for feature in section.add_on_features:
                lines.append(f"**{feature.name}** - {_money(feature.price)}  ")
                lines.append(f"{feature.description}  ")
                lines.append(f"*Rationale:* {feature.rationale}")
                lines.append("")
        else:
            lines.append("No add-on features selected.")
            lines.append("")

        if section.feature_bundles:
            lines.extend(["### Feature Bundles (Discounts Applied)", ""])
            for bundle in section.feature_bundles:
                lines.append(f"**{bundle.name}**  ")
                lines.append(f"Features: {', '.join(bundle.features)}  ")
                lines.append(f"Original: {_money(bundle.original_price)}  ")
                lines.append(f"Discounted: {_money(bundle.discounted_price)}  ")
                lines.append(f"**Savings: {_money(bundle.savings)}**")
                lines.append("")

        if section.conflicts:
            lines.extend(["### Conflicts", ""])
            for conflict in section.conflicts:
                lines.append(f"- **{conflict.feature_a}** vs **{conflict.feature_b}**  ")
                lines.append(f"  Resolution: {conflict.resolution}")
            lines.append("")

        if section.dependencies:
            lines.extend(["### Feature Dependencies", ""])
            for dep in section.dependencies:
                lines.append(f"**{dep.feature}**  ")
                lines.append(f"Requires: {', '.join(dep.requires)}  ")
                lines.append(f"Reason: {dep.reason}")
                lines.append("")
        return "\n".join(lines).rstrip()

    def _section11(self, section: SupportPlan) -> str:
        lines = ["## Section 11: Post-Launch Support Plan", ""]
        lines.append(f"**Support Duration:** {section.support_duration}")
        lines.extend(["", "### Training", ""])
        training = section.training
        if training.required:
            lines.append("**Required:** Yes  ")
            lines.append(f"**Topics:** {', '.join(training.topics)}  ")
            lines.append(f"**Format:** {training.format}  ")
            lines.append(f"**Duration:** {training.duration}")
        else:
            lines.append("**Required:** No")

        maintenance = section.maintenance_plan
        lines.extend(["", "### Maintenance Plan", ""])
        lines.append(f"**Provider:** {maintenance.provider.upper()}  ")
        lines.append(f"**Frequency:** {maintenance.frequency}")
        lines.append("")
        lines.append("Includes:")
        lines.extend(_bullets(maintenance.includes))

        if section.future_phases:
            lines.extend(["", "### Future Enhancement Phases", ""])
            lines.extend(_bullets(section.future_phases))

        hosting = section.hosting
        lines.extend(["", "### Hosting", ""])
        lines.append(f"**Tier:** {hosting.tier}  ")
        lines.append(f"**Monthly Price:** {_money(hosting.monthly_price)}/month")
        lines.append("")
        lines.append("Includes:")
        lines.extend(_bullets(hosting.includes))
        return "\n".join(lines)

    def _section12(self, section: Timeline) -> str:
        lines = ["## Section 12: Project Timeline", ""]
        if section.desired_launch_date:
            lines.append(f"**Desired Launch Date:** {section.desired_launch_date}  ")
        if section.desired_timeline:
            lines.append(f"**Desired Timeline:** {section.desired_timeline}  ")
        lines.append(f"**Estimated Duration:** {section.estimated_duration}")
        lines.extend(["", "### Milestones", ""])
        for milestone in section.milestones:
            lines.append(f"**{milestone.name}** ({milestone.duration})  ")
            lines.append(milestone.description)
            if milestone.dependencies:
                lines.append(f"Dependencies: {', '.join(milestone.dependencies)}")
            if milestone.client_responsibility:
                lines.append(f"*Client Responsibility:* {milestone.client_responsibility}")
            lines.append("")
        lines.extend(["### Critical Path", ""])
        for i, item in enumerate(section.critical_path, start=1):
            lines.append(f"{i}. {item}")
        if section.risks:
            lines.extend(["", "### Risks & Mitigation", ""])
            for risk in section.risks:
                lines.append(f"**Risk:** {risk.risk}  ")
                lines.append(f"**Mitigation:** {risk.mitigation}")
                lines.append("")
        return "\n".join(lines).rstrip()

    def _section13(self, section: InvestmentSummary) -> str:
        lines = ["## Section 13: Investment Summary", "", "### Project Investment", ""]
        lines.append(f"**Base Package:** {section.base_package.name} - {_money(section.base_package.price)}")
        lines.append("")
        if section.add_on_features:
            lines.append("**Add-On Features:**")
            lines.extend(f"- {item.name}: {_money(item.price)}" for item in section.add_on_features)
            lines.append("")
        if section.bundle_discounts:
            lines.append("**Bundle Discounts:**")
            lines.extend(f"- {b.name}: -{_money(b.discount)}" for b in section.bundle_discounts)
            lines.append("")
        lines.append(f"**Subtotal:** {_money(section.subtotal)}")

        hosting = section.hosting
        lines.extend(["", "### Hosting (Recurring)", ""])
        lines.append(f"**{hosting.tier} Hosting**  ")
        lines.append(f"- Monthly: {_money(hosting.monthly_price)}/month")
        lines.append(f"- Annual: {_money(hosting.annual_price)}/year")

        lines.extend(["", "### Total Investment", ""])
        lines.append(f"**One-Time Project Cost:** {_money(section.total_project_investment)}  ")
        lines.append(f"**First Year Total (incl. hosting):** {_money(section.total_first_year_investment)}")

        if section.roi.calculable:
            lines.extend(["", "### Return on Investment", ""])
            if section.roi.revenue_increase is not None:
                lines.append(f"**Revenue Increase:** {_money(section.roi.revenue_increase)}")
            lines.append(f"**Estimated ROI:** {section.roi.estimated_roi}  ")
            lines.append(f"**Payback Period:** {section.roi.payback_period}")

        lines.extend(["", "### Payment Schedule", ""])
        for payment in section.payment_schedule:
            lines.append(f"**{payment.milestone}** ({payment.percentage:g}%)  ")
            lines.append(f"Amount: {_money(payment.amount)}")
            lines.append("")
        return "\n".join(lines).rstrip()

    def _section14(self, section: ValidationOutcomes) -> str:
        lines = ["## Section 14: Validation Outcomes", ""]
        groups = (
            ("Understanding Validations", section.understanding_validations),
            ("Conflicts Resolved", section.conflicts_resolved),
            ("Assumptions Clarified", section.assumptions_clarified),
        )
        rendered_any = False
        for title, items in groups:
            if items:
                rendered_any = True
                lines.extend([f"### {title}", ""])
                lines.extend(_bullets(items))
                lines.append("")
        if section.key_decisions:
            rendered_any = True
            lines.extend(["### Key Decisions", ""])
            for decision in section.key_decisions:
                lines.append(f"**{decision.decision}**  ")
                lines.append(f"Rationale: {decision.rationale}")
                lines.append("")
        if not rendered_any:
            lines.append("No validations or conflicts during conversation.")
        return "\n".join(lines).rstrip()

    def _render_footer(self, doc: ScopeDocument) -> str:
        lines = ["## Document Information", ""]
        lines.append(f"**Generated:** {doc.generated_at.isoformat()}  ")
        lines.append(f"**Version:** {doc.version}  ")
        lines.append(f"**Conversation ID:** {doc.conversation_id}")
        lines.append("")
        lines.append(
            f"*This document was generated by the {self.agency_name} client intake system. "
            f"All information has been gathered with the client through interactive conversation.*"
        )
        return "\n".join(lines)

    @staticmethod
    def _plain(value) -> str:
        if isinstance(value, bool):
            return _yes_no(value)
        if isinstance(value, (list, tuple)):
            return ", ".join(str(v) for v in value) or "None"
        return str(value)


def render_markdown(doc: ScopeDocument, agency_name: str | None = None) -> str:
    return ScopeRenderer(agency_name).render(doc)
