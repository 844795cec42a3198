# scope_intake/conversation/topics.py
"""
Topic catalog: conversational topics, the facts that close them,
and keyword hints used to label asked questions.
"""

from dataclasses import dataclass

GENERAL_TOPIC = "general"


@dataclass(frozen=True)
class TopicMapping:
    """A conversational topic and its closure rule."""

    topic: str
    display_name: str
    required_facts: tuple[str, ...]
    keywords: tuple[str, ...]
    min_facts_for_closure: int

    def __post_init__(self) -> None:
        if not 0 < self.min_facts_for_closure <= len(self.required_facts):
            raise ValueError(
                f"Topic '{self.topic}': min_facts_for_closure={self.min_facts_for_closure} "
                f"must be between 1 and {len(self.required_facts)}"
            )


class TopicCatalog:
    """Immutable, ordered collection of topic mappings."""

    def __init__(self, mappings: list[TopicMapping]) -> None:
        by_topic: dict[str, TopicMapping] = {}
        for mapping in mappings:
            if mapping.topic in by_topic:
                raise ValueError(f"Duplicate topic: {mapping.topic}")
            by_topic[mapping.topic] = mapping
        self._mappings = tuple(mappings)
        self._by_topic = by_topic

    @property
    def mappings(self) -> tuple[TopicMapping, ...]:
        return self._mappings

    def get(self, topic: str) -> TopicMapping | None:
        return self._by_topic.get(topic)

    def display_name(self, topic: str) -> str:
        mapping = self._by_topic.get(topic)
        return mapping.display_name if mapping else topic

    def topic_for_question(self, question_text: str) -> str:
        """Label a question with the first topic whose keyword it contains."""
        lower_question = question_text.lower()
        for mapping in self._mappings:
            if any(keyword in lower_question for keyword in mapping.keywords):
                return mapping.topic
        return GENERAL_TOPIC

    def __contains__(self, topic: object) -> bool:
        return topic in self._by_topic

    def __iter__(self):
        return iter(self._mappings)

    def __len__(self) -> int:
        return len(self._mappings)


def _topic(topic, display_name, required_facts, keywords, min_facts) -> TopicMapping:
    return TopicMapping(topic, display_name, tuple(required_facts), tuple(keywords), min_facts)


DEFAULT_TOPICS: tuple[TopicMapping, ...] = (
    _topic(
        "business_fundamentals",
        "Business basics (name, email, description)",
        ["contact_name", "contact_email", "business_description", "business_type"],
        ["business", "company", "contact", "name", "email"],
        3,
    ),
    _topic(
        "project_goals",
        "Project goals and objectives",
        ["project_purpose", "target_audience", "success_metrics"],
        ["goal", "purpose", "objective", "why", "audience", "users"],
        2,
    ),
    _topic(
        "platform_delivery",
        "Platform and delivery (web, mobile, desktop)",
        ["platform", "device_support", "browser_requirements"],
        ["platform", "mobile", "web", "desktop", "ios", "android", "browser"],
        1,
    ),
    _topic(
        "hosting_infrastructure",
        "Hosting and infrastructure",
        ["hosting_preference", "deployment_method", "scaling_requirements"],
        ["hosting", "server", "deploy", "cloud", "infrastructure", "aws", "vercel"],
        1,
    ),
    _topic(
        "authentication",
        "User authentication and login",
        ["auth_method", "user_roles", "permission_model"],
        ["login", "sign in", "authentication", "auth", "user account", "password", "sso"],
        1,
    ),
    _topic(
        "database_storage",
        "Database and data storage",
        ["database_type", "data_structure", "storage_requirements"],
        ["database", "data", "storage", "sql", "nosql", "postgres", "mongo"],
        1,
    ),
    _topic(
        "payment_processing",
        "Payment processing and billing",
        ["payment_provider", "payment_features", "subscription_model", "billing_frequency"],
        ["payment", "pay", "billing", "subscription", "stripe", "paypal", "checkout"],
        1,
    ),
    _topic(
        "content_management",
        "Content management and editing",
        ["cms_type", "content_editing", "media_management"],
        ["content", "cms", "editing", "blog", "posts", "articles", "media", "images"],
        1,
    ),
    _topic(
        "user_features",
        "Core user-facing features",
        ["primary_features", "user_interactions", "social_features"],
        ["feature", "functionality", "user", "profile", "social", "sharing", "comments"],
        2,
    ),
    _topic(
        "admin_features",
        "Admin dashboard and controls",
        ["admin_panel", "analytics_reporting", "moderation_tools"],
        ["admin", "dashboard", "analytics", "reports", "management", "moderation"],
        1,
    ),
    _topic(
        "search_discovery",
        "Search and content discovery",
        ["search_functionality", "filtering_options", "recommendation_engine"],
        ["search", "find", "filter", "discover", "browse", "recommendations"],
        1,
    ),
    _topic(
        "notifications",
        "Notifications and alerts",
        ["notification_types", "notification_channels", "notification_preferences"],
        ["notification", "alert", "email", "push", "sms", "updates"],
        1,
    ),
    _topic(
        "integrations",
        "Third-party integrations",
        ["integration_list", "api_requirements", "webhook_needs"],
        ["integration", "api", "third-party", "connect", "sync", "import", "export"],
        1,
    ),
    _topic(
        "timeline_budget",
        "Timeline and budget",
        ["project_timeline", "budget_indication", "launch_date", "budget_flexibility"],
        ["timeline", "deadline", "launch", "budget", "cost", "price", "when", "how much"],
        2,
    ),
    _topic(
        "design_branding",
        "Design and branding preferences",
        ["design_style", "brand_guidelines", "color_preferences", "existing_branding"],
        ["design", "brand", "style", "look", "feel", "colors", "logo", "aesthetic"],
        1,
    ),
    _topic(
        "competitors_references",
        "Competitors and reference sites",
        ["competitor_examples", "reference_sites", "inspiration_sources"],
        ["competitor", "example", "reference", "similar", "like", "inspired by"],
        1,
    ),
    _topic(
        "existing_systems",
        "Existing systems and migration",
        ["current_system", "migration_needs", "data_transfer"],
        ["existing", "current", "migrate", "transfer", "replace", "old system"],
        1,
    ),
    _topic(
        "team_resources",
        "Team and resources",
        ["team_size", "technical_expertise", "ongoing_maintenance"],
        ["team", "developer", "designer", "maintain", "support", "internal"],
        1,
    ),
    _topic(
        "compliance_legal",
        "Compliance and legal requirements",
        ["compliance_requirements", "legal_constraints", "privacy_needs"],
        ["compliance", "legal", "gdpr", "privacy", "terms", "regulations", "hipaa"],
        1,
    ),
    _topic(
        "performance_scale",
        "Performance and scale expectations",
        ["expected_users", "performance_requirements", "scaling_timeline"],
        ["performance", "speed", "scale", "users", "traffic", "load", "concurrent"],
        1,
    ),
)


def build_default_topic_catalog() -> TopicCatalog:
    """Build the standard 20-topic catalog."""
    return TopicCatalog(list(DEFAULT_TOPICS))
