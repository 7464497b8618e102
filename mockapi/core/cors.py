# mockapi/core/cors.py
"""CORS decisions for admin traffic (static policy) and mock traffic (stored settings).

The two modes differ on one point: the static policy never blocks a
request, it only withholds headers, while the dynamic policy rejects an
unlisted origin with 403 before any mock lookup happens.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from mockapi.schemas.settings import GlobalSettings

MAX_AGE = 86400


@dataclass
class CORSPolicy:
    origins: List[str] = field(default_factory=lambda: ["*"])
    methods: List[str] = field(default_factory=lambda: ["GET", "POST", "PUT", "DELETE", "OPTIONS"])
    headers: List[str] = field(default_factory=lambda: ["Content-Type", "Authorization"])
    max_age: int = MAX_AGE


@dataclass
class CORSDecision:
    allowed: bool
    headers: Dict[str, str] = field(default_factory=dict)


def _cors_headers(allowed_origin: str, methods: List[str], headers: List[str], max_age: int) -> Dict[str, str]:
    result = {
        "Access-Control-Allow-Origin": allowed_origin,
        "Access-Control-Allow-Methods": ", ".join(methods),
        "Access-Control-Allow-Headers": ", ".join(headers),
        "Access-Control-Max-Age": str(max_age),
    }
    if allowed_origin != "*":
        result["Access-Control-Allow-Credentials"] = "true"
    return result


def decide_static(origin: Optional[str], policy: CORSPolicy) -> CORSDecision:
    """Admin API policy. Unlisted origins get no CORS headers but still reach the handler."""
    request_origin = origin or "*"
    if request_origin in policy.origins:
        allowed_origin = request_origin
    elif "*" in policy.origins:
        allowed_origin = "*"
    else:
        return CORSDecision(allowed=True)

    return CORSDecision(
        allowed=True,
        headers=_cors_headers(allowed_origin, policy.methods, policy.headers, policy.max_age),
    )


def decide_dynamic(origin: Optional[str], settings: GlobalSettings) -> CORSDecision:
    """Mock traffic policy, evaluated against freshly loaded settings.

    A request without an Origin header is treated as origin ``*``, so it
    is only accepted when the wildcard is configured.
    """
    request_origin = origin or "*"
    origins = settings.cors_origins

    if "*" in origins:
        allowed_origin = "*"
    elif request_origin in origins:
        allowed_origin = request_origin
    else:
        return CORSDecision(allowed=False)

    return CORSDecision(
        allowed=True,
        headers=_cors_headers(allowed_origin, settings.cors_methods, settings.cors_headers, MAX_AGE),
    )
