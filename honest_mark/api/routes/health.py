from __future__ import annotations

from fastapi import APIRouter, Request

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(request: Request) -> dict:
    """Liveness check.

    Always answers ``status: ok``; ``client`` tells whether a document client
    is configured and open, so a gateway started without a token is visible.
    """

    client = getattr(request.app.state, "document_client", None)
    client_state = "absent" if client is None else ("closed" if client.closed else "ready")
    return {"status": "ok", "client": client_state}
