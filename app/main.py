"""FastAPI entry point."""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1.router import router as api_router
from seo_auditor import __version__
from seo_auditor.config.settings import settings

app = FastAPI(
    title="SEO Auditor API",
    description="""
API for auditing a single web page's on-page SEO.

## Features

- **SEO Score**: 0-100 overall score plus a score per audit category
- **Signals**: Every extracted fact with a good/warning/critical status
- **Recommendations**: Prioritized, actionable fixes

Submit raw `html` to audit markup you already have, or just a `url` to have
the page fetched.
""",
    version=__version__,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.api.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)

app.include_router(api_router, prefix="/api/v1")
