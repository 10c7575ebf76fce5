"""Static catalog of business ideas and the investment/category filter over it."""

from venture_backend.errors import InvalidParameter
from venture_backend.parsing import parse_number

IDEA_CATALOG = (
    {"id": 1, "title": "AI-Powered Business Consultant", "category": "AI & Machine Learning", "investment": 15000, "projectedROI": 180, "feasibility": 85},
    {"id": 2, "title": "Niche E-commerce Platform", "category": "E-commerce", "investment": 8000, "projectedROI": 120, "feasibility": 90},
    {"id": 3, "title": "Remote Team Management SaaS", "category": "Remote Work Tools", "investment": 25000, "projectedROI": 200, "feasibility": 75},
    {"id": 4, "title": "Telemedicine App", "category": "Health Tech", "investment": 35000, "projectedROI": 250, "feasibility": 70},
    {"id": 5, "title": "Sustainable Product Marketplace", "category": "Sustainable Products", "investment": 12000, "projectedROI": 140, "feasibility": 80},
    {"id": 6, "title": "Online Course Platform", "category": "EdTech", "investment": 10000, "projectedROI": 160, "feasibility": 88},
    {"id": 7, "title": "Payment Gateway Solution", "category": "FinTech", "investment": 40000, "projectedROI": 300, "feasibility": 65},
    {"id": 8, "title": "Security Audit Service", "category": "Cybersecurity", "investment": 20000, "projectedROI": 190, "feasibility": 78},
)


def _bound(name, value):
    if value is None:
        return None
    return parse_number(name, value)


def filter_ideas(catalog, min_investment=None, max_investment=None, category=None):
    """
    Ideas whose investment lies in [min_investment, max_investment] and whose
    category matches exactly. ``None`` (or an empty category) means no
    constraint. Catalog order is kept.
    """
    low = _bound("minInvestment", min_investment)
    high = _bound("maxInvestment", max_investment)

    selected = []
    for idea in catalog:
        if low is not None and idea["investment"] < low:
            continue
        if high is not None and idea["investment"] > high:
            continue
        if category and idea["category"] != category:
            continue
        selected.append(idea)
    return selected


def filter_from_payload(catalog, payload):
    if not isinstance(payload, dict):
        raise InvalidParameter("request body must be a JSON object")
    return filter_ideas(
        catalog,
        min_investment=payload.get("minInvestment"),
        max_investment=payload.get("maxInvestment"),
        category=payload.get("category"),
    )
