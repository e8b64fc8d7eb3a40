"""FastAPI entry point for the x402check validation service."""

from __future__ import annotations

import logging
from typing import Dict

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from x402check import __version__
from x402check.api import api_router
from x402check.config import get_settings


LOGGER = logging.getLogger(__name__)

settings = get_settings()

logging.basicConfig(level=settings.log_level)

app = FastAPI(
	title="x402check",
	version=__version__,
	description="Offline validation of x402 payment-required configurations.",
)

app.add_middleware(
	CORSMiddleware,
	allow_origins=settings.cors_allow_origins,
	allow_credentials=False,
	allow_methods=["*"],
	allow_headers=["*"],
)

app.include_router(api_router)

LOGGER.info("x402check %s ready (strict default: %s)", __version__, settings.strict_default)


@app.get("/health")
def healthcheck() -> Dict[str, str]:
	"""Basic readiness probe."""
	return {"status": "ok", "version": __version__}
