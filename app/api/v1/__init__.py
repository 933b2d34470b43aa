from app.api.v1 import analysis, demo, events, reviews, status, webhook

__all__ = [
    "analysis",
    "demo",
    "events",
    "reviews",
    "status",
    "webhook",
]
