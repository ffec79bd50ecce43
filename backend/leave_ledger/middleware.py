from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi.middleware.cors import CORSMiddleware

if TYPE_CHECKING:
    from fastapi import FastAPI

    from leave_ledger.config import Settings

# Dev auth travels in these headers; browsers must be allowed to send them.
AUTH_HEADERS = ["X-Company-Id", "X-User-Id", "X-Role"]


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Allow the HR front end to call the API cross-origin."""
    app.add_middleware(
        CORSMiddleware,  # ty: ignore[invalid-argument-type]
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=["Content-Type", *AUTH_HEADERS],
    )
