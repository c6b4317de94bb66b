"""
Outreach email templates.

Plain string substitution over an enriched customer; the only decisions are
which optional sentences to include.
"""

from __future__ import annotations

from typing import Dict, Optional

from models.customer import CustomerFeature, CustomerTier, EnrichedCustomer
from models.email import EmailTemplate, EmailTemplateType
from services.ranking import format_amount, whole_percent

DEFAULT_SIGNATURE = "[CSM Name]"
DEFAULT_PRODUCT = "Molin"

CONVERSATION_LIMITS = {
    CustomerTier.FREE: 50,
    CustomerTier.STARTUP: 125,
    CustomerTier.GROWTH: 500,
    CustomerTier.SCALE: 1250,
    CustomerTier.ENTERPRISE: 999999,
}

FEATURE_DESCRIPTIONS = {
    CustomerFeature.SUPPORT_AI: (
        "Support AI automatically answers common customer questions 24/7, "
        "reducing your support team's workload by up to 70%."
    ),
    CustomerFeature.SALES_AI: (
        "Sales AI engages potential customers in real-time, qualifying leads "
        "and guiding them through your sales funnel."
    ),
    CustomerFeature.LEAD_GEN: (
        "Lead Gen AI automatically collects emails & phone numbers from "
        "interested website visitors, building your contact list while you sleep."
    ),
    CustomerFeature.PERSONALIZATION: (
        "Personalization AI adapts responses based on user behavior, location, "
        "and preferences to create tailored experiences for each visitor."
    ),
    CustomerFeature.NINJA: (
        "Ninja mode provides advanced customization options, letting you "
        "fine-tune AI behavior with custom prompts and logic flows."
    ),
}

FEATURE_BENEFITS = {
    CustomerFeature.SUPPORT_AI: "This could save your team several hours per week on repetitive questions.",
    CustomerFeature.SALES_AI: "Companies using Sales AI typically see a 35% increase in qualified leads.",
    CustomerFeature.LEAD_GEN: "On average, Lead Gen captures 15-20 new contacts per week automatically.",
    CustomerFeature.PERSONALIZATION: "Personalized experiences increase conversion rates by up to 25%.",
    CustomerFeature.NINJA: (
        "Advanced users leverage Ninja to create highly specific workflows "
        "unique to their business."
    ),
}

# Keys of the all-templates response.
RESPONSE_KEYS = {
    EmailTemplateType.CHECK_IN: "checkIn",
    EmailTemplateType.UPGRADE: "upgrade",
    EmailTemplateType.FEATURE_DEMO: "featureDemo",
}

# Query-string spellings accepted for each template.
TEMPLATE_KEYS = {
    "check-in": EmailTemplateType.CHECK_IN,
    "checkIn": EmailTemplateType.CHECK_IN,
    "upgrade": EmailTemplateType.UPGRADE,
    "feature-demo": EmailTemplateType.FEATURE_DEMO,
    "featureDemo": EmailTemplateType.FEATURE_DEMO,
}


def _limit(tier: CustomerTier) -> str:
    return f"{CONVERSATION_LIMITS[tier]:,}"


def upgrade_benefits(current: CustomerTier, target: CustomerTier) -> str:
    """Bullet list of what the next plan adds."""
    if target == CustomerTier.ENTERPRISE:
        return (
            "- Unlimited monthly conversations\n"
            "- Priority support with dedicated success manager\n"
            "- Custom integrations tailored to your needs\n"
            "- Advanced analytics and reporting\n"
            "- White-label options"
        )
    if target == CustomerTier.SCALE:
        return (
            f"- {_limit(target)} monthly conversations (up from {_limit(current)})\n"
            "- Access to advanced personalization features\n"
            "- Priority support response times\n"
            "- Advanced analytics dashboard"
        )
    if target == CustomerTier.GROWTH:
        return (
            f"- {_limit(target)} monthly conversations (up from {_limit(current)})\n"
            "- Multi-language support\n"
            "- Enhanced AI capabilities\n"
            "- Email support"
        )
    return (
        "- Higher conversation limits\n"
        "- More advanced features\n"
        "- Better support options"
    )


def check_in_template(
    customer: EnrichedCustomer,
    csm_name: str = DEFAULT_SIGNATURE,
    product: str = DEFAULT_PRODUCT,
) -> EmailTemplate:
    """For at-risk customers who have gone quiet."""
    usage_note = ""
    if customer.usage_percentage < 50:
        usage_note = (
            " and your conversation usage has dropped to "
            f"{whole_percent(customer.usage_percentage)}%"
        )

    body = (
        "Hi there,\n\n"
        "I noticed we haven't chatted in a while and wanted to see how things "
        f"are going with {product} for {customer.company_name}.\n\n"
        f"I saw that you haven't logged in for about {customer.days_since_login} days"
        f"{usage_note}.\n\n"
        "Are you still getting value from the platform? Is there anything we can "
        f"help with or improve? We're here to make sure {product} works well for "
        "your team.\n\n"
        "Would love to catch up this week if you have 15 minutes.\n\n"
        f"Best regards,\n{csm_name}"
    )
    return EmailTemplate(
        type=EmailTemplateType.CHECK_IN,
        subject=f"Just checking in on your {product} experience 👋",
        body=body,
    )


def upgrade_template(
    customer: EnrichedCustomer,
    csm_name: str = DEFAULT_SIGNATURE,
    product: str = DEFAULT_PRODUCT,
) -> EmailTemplate:
    """For customers close to their plan limits."""
    current = customer.current_tier
    target = current.next_tier()
    body = (
        "Hi there,\n\n"
        f"Great news! I noticed you're using {whole_percent(customer.usage_percentage)}% "
        f"of your monthly conversation limit on the {current.value} plan.\n\n"
        f"Your current tier ({current.value}) handles "
        f"{customer.monthly_conversation_limit:,} conversations/month, but with "
        f"your growth, you might benefit from {target.value} "
        f"({_limit(target)} conversations/month).\n\n"
        f"Upgrading would give you:\n{upgrade_benefits(current, target)}\n\n"
        f"This would cost an additional ${format_amount(customer.uplift)}/month but "
        "would ensure you never hit your conversation limits.\n\n"
        "Interested in a 15-min call to see if it makes sense for "
        f"{customer.company_name}?\n\n"
        f"Best regards,\n{csm_name}"
    )
    return EmailTemplate(
        type=EmailTemplateType.UPGRADE,
        subject=(
            f"Quick idea: Scale {customer.company_name}'s chatbot to the next level 🚀"
        ),
        body=body,
    )


def feature_demo_template(
    customer: EnrichedCustomer,
    csm_name: str = DEFAULT_SIGNATURE,
    product: str = DEFAULT_PRODUCT,
) -> EmailTemplate:
    """Introduce the first feature the customer has not adopted."""
    if customer.features_not_used:
        feature = customer.features_not_used[0]
        name = feature.value
        description = FEATURE_DESCRIPTIONS[feature]
        benefit = FEATURE_BENEFITS[feature]
    else:
        name = "Lead Gen AI"
        description = (
            f"{name} is a powerful feature that can enhance your customer engagement."
        )
        benefit = "This feature could significantly improve your results."

    used = ", ".join(f.value for f in customer.features_used)
    used_suffix = " features" if len(customer.features_used) > 1 else ""
    others = ""
    if len(customer.features_not_used) > 1:
        rest = ", ".join(f.value for f in customer.features_not_used[1:])
        others = f"You also have access to {rest} which could further enhance your setup."

    body = (
        "Hi there,\n\n"
        f"You're doing amazing with {used}{used_suffix}! I wanted to introduce you "
        f"to another powerful capability: {name}.\n\n"
        f"{description}\n\n"
        f"{benefit}\n\n"
        f"{others}\n\n"
        "Would you like a quick 10-minute walkthrough? I can show you how "
        f"{customer.company_name} could benefit.\n\n"
        f"Best regards,\n{csm_name}"
    )
    return EmailTemplate(
        type=EmailTemplateType.FEATURE_DEMO,
        subject=f"New feature to explore: {name} for {customer.company_name} 💼",
        body=body,
    )


_BUILDERS = {
    EmailTemplateType.CHECK_IN: check_in_template,
    EmailTemplateType.UPGRADE: upgrade_template,
    EmailTemplateType.FEATURE_DEMO: feature_demo_template,
}


def render_templates(
    customer: EnrichedCustomer,
    csm_name: Optional[str] = None,
    product: str = DEFAULT_PRODUCT,
) -> Dict[EmailTemplateType, EmailTemplate]:
    """All three templates for one customer."""
    signature = csm_name or DEFAULT_SIGNATURE
    return {
        kind: builder(customer, signature, product)
        for kind, builder in _BUILDERS.items()
    }


def resolve_template_type(key: str) -> Optional[EmailTemplateType]:
    return TEMPLATE_KEYS.get(key)
