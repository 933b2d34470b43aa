from fastapi import APIRouter

from app.api.v1 import analysis, demo, events, reviews, status, webhook

# Paths are served from the root; the dashboard calls them unprefixed.
api_router = APIRouter()

api_router.include_router(status.router)
api_router.include_router(reviews.router)
api_router.include_router(webhook.router)
api_router.include_router(demo.router)
api_router.include_router(analysis.router)
api_router.include_router(events.router)
