"""Response error extraction for load test observability.

Parses EventMart API error responses into human-readable messages.
Handles two response shapes:

- Pydantic validation (422): {"detail": [{"loc": [...], "msg": "...", "type": "..."}]}
- Marketplace errors (400/401/403/404/409/500): {"code": "...", "error": {"field": ["msg", ...]}}
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response


def extract_error_detail(response: Response) -> str:
    """Extract a human-readable error message from an API error response.

    Returns a compact string suitable for Locust failure messages and log lines.
    """
    try:
        body = response.json()
    except ValueError:
        # Not JSON — return raw text, truncated
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    # Pydantic validation errors: {"detail": [{"loc": [...], "msg": "..."}]}
    if isinstance(body.get("detail"), list):
        parts = []
        for err in body["detail"]:
            loc = ".".join(str(p) for p in err.get("loc", []))
            msg = err.get("msg", str(err))
            parts.append(f"{loc}: {msg}" if loc else msg)
        return " | ".join(parts)

    # HTTPException: {"detail": "msg"}
    if isinstance(body.get("detail"), str):
        return body["detail"]

    # Marketplace errors: {"code": "...", "error": {"field": ["msg", ...]}}
    if "error" in body:
        error = body["error"]
        prefix = f"[{body['code']}] " if body.get("code") else ""
        if isinstance(error, dict):
            return prefix + " | ".join(
                f"{k}: {'; '.join(v) if isinstance(v, list) else v}" for k, v in error.items()
            )
        return prefix + str(error)

    # Unknown shape — stringify and truncate
    return str(body)[:300]
