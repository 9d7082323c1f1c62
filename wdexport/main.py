"""
FastAPI application entrypoint.

This module defines the FastAPI app and mounts the export routes. The
translation logic itself lives under ``wdexport/emitter``.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from wdexport.api.export import router as export_router
from wdexport.core.config import settings
from wdexport.core.logging import configure_logging

configure_logging()

app = FastAPI(title="WebDriver Export Service")
origins = [o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(export_router)


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}
