"""Market trend reference data."""

TREND_CATALOG = (
    {"id": 1, "name": "AI & Machine Learning", "growth": 42, "demand": "High", "opportunity": "Enterprise automation, predictive analytics"},
    {"id": 2, "name": "E-commerce", "growth": 28, "demand": "High", "opportunity": "D2C brands, social commerce"},
    {"id": 3, "name": "Remote Work Tools", "growth": 35, "demand": "High", "opportunity": "Collaboration software, virtual offices"},
    {"id": 4, "name": "Health Tech", "growth": 38, "demand": "High", "opportunity": "Telemedicine, wellness apps"},
    {"id": 5, "name": "Sustainable Products", "growth": 25, "demand": "Medium", "opportunity": "Eco-friendly packaging, green tech"},
    {"id": 6, "name": "EdTech", "growth": 22, "demand": "Medium", "opportunity": "Online learning, skill development"},
    {"id": 7, "name": "FinTech", "growth": 30, "demand": "High", "opportunity": "Digital payments, blockchain"},
    {"id": 8, "name": "Cybersecurity", "growth": 45, "demand": "High", "opportunity": "Cloud security, identity management"},
)


def search_trends(trends, query):
    """Case-insensitive substring match on name or opportunity; empty query matches all."""
    needle = (query or "").lower()
    return [
        trend
        for trend in trends
        if needle in trend["name"].lower() or needle in trend["opportunity"].lower()
    ]
