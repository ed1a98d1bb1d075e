"""FastAPI application setup for the rail disruption risk service."""

from fastapi import FastAPI

from .api import router as api_router

app = FastAPI(title="Rail Disruption Risk")

# API routes
app.include_router(api_router, prefix="/v1")
