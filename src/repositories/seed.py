"""
Sample accounts loaded into the in-memory store at process start.

Dates are expressed as offsets from "now" so the dashboard shows the same mix
of healthy, at-risk and critical accounts whenever it is started.
"""

from datetime import datetime, timedelta, timezone
from typing import List, Optional

from models.customer import Customer

# (id, company, tier, limit, used, trend, mrr, used features, unused features,
#  tickets, sentiment, login days ago, contact days ago, signup days ago,
#  language, team size, industry, country)
_SEED_ROWS = (
    ("cust_001", "Brightleaf Dental", "Startup", 125, 18, [40, 31, 18], 29.0,
     ["Support AI"], ["Sales AI", "Lead Gen", "Personalization", "Ninja"],
     4, "negative", 52, 70, 410, "en", 4, "Healthcare", "US"),
    ("cust_002", "Nordhavn Logistics", "Scale", 1250, 1190, [980, 1100, 1190], 119.0,
     ["Support AI", "Sales AI", "Lead Gen"], ["Personalization", "Ninja"],
     1, "positive", 1, 9, 730, "da", 22, "Logistics", "DK"),
    ("cust_003", "Casa Moderna", "Growth", 500, 470, [350, 420, 470], 49.0,
     ["Support AI", "Lead Gen"], ["Sales AI", "Personalization", "Ninja"],
     0, "positive", 2, 15, 300, "es", 6, "Retail", "ES"),
    ("cust_004", "Kite & Anchor Travel", "Startup", 125, 60, [90, 75, 60], 29.0,
     ["Support AI", "Sales AI"], ["Lead Gen", "Personalization", "Ninja"],
     2, "neutral", 36, 40, 520, "en", 3, "Travel", "GB"),
    ("cust_005", "Helix Biolabs", "Enterprise", 999999, 42000, [39000, 41000, 42000], 899.0,
     ["Support AI", "Sales AI", "Lead Gen", "Personalization"], ["Ninja"],
     6, "negative", 5, 12, 1100, "de", 140, "Biotech", "DE"),
    ("cust_006", "Pixel Orchard", "Free", 50, 48, [20, 35, 48], 0.0,
     ["Support AI"], ["Sales AI", "Lead Gen", "Personalization", "Ninja"],
     0, "positive", 0, 30, 60, "en", 2, "Software", "CA"),
    ("cust_007", "Maison Lumière", "Growth", 500, 90, [310, 180, 90], 49.0,
     ["Support AI", "Personalization"], ["Sales AI", "Lead Gen", "Ninja"],
     5, "neutral", 41, 55, 640, "fr", 9, "Hospitality", "FR"),
    ("cust_008", "Summit Ridge Outfitters", "Scale", 1250, 700, [650, 690, 700], 119.0,
     ["Support AI", "Sales AI", "Lead Gen", "Personalization", "Ninja"], [],
     1, "positive", 3, 6, 880, "en", 18, "Retail", "US"),
    ("cust_009", "Tidewater Insurance", "Enterprise", 999999, 8000, [15000, 11000, 8000], 1200.0,
     ["Support AI", "Sales AI"], ["Lead Gen", "Personalization", "Ninja"],
     3, "neutral", 63, 90, 1500, "en", 210, "Insurance", "US"),
    ("cust_010", "Quokka Coffee Co", "Startup", 125, 118, [80, 104, 118], 29.0,
     ["Support AI", "Lead Gen"], ["Sales AI", "Personalization", "Ninja"],
     0, "positive", 1, 21, 200, "en", 5, "Food & Beverage", "AU"),
    ("cust_011", "Vertex Fintech", "Scale", 1250, 300, [800, 520, 300], 119.0,
     ["Support AI", "Sales AI", "Personalization"], ["Lead Gen", "Ninja"],
     7, "negative", 33, 45, 950, "en", 35, "Finance", "SG"),
    ("cust_012", "Studio Kanso", "Growth", 500, 260, [240, 255, 260], 49.0,
     ["Support AI", "Sales AI", "Lead Gen"], ["Personalization", "Ninja"],
     1, "neutral", 8, 14, 420, "ja", 7, "Design", "JP"),
)


def seed_customers(now: Optional[datetime] = None) -> List[Customer]:
    """Build the sample account list relative to ``now``."""
    now = now or datetime.now(timezone.utc)
    customers = []
    for (
        customer_id, company, tier, limit, used, trend, mrr, used_features,
        unused_features, tickets, sentiment, login_ago, contact_ago, signup_ago,
        language, team, industry, country,
    ) in _SEED_ROWS:
        customers.append(
            Customer(
                customer_id=customer_id,
                company_name=company,
                current_tier=tier,
                signup_date=now - timedelta(days=signup_ago),
                last_login_date=now - timedelta(days=login_ago),
                monthly_conversation_limit=limit,
                conversations_used_this_month=used,
                conversation_trend=trend,
                monthly_recurring_revenue=mrr,
                features_used=used_features,
                features_not_used=unused_features,
                support_tickets_last_month=tickets,
                language=language,
                number_of_team_members=team,
                industry=industry,
                country=country,
                last_csm_contact_date=now - timedelta(days=contact_ago),
                customer_sentiment=sentiment,
            )
        )
    return customers
