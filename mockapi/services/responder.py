# mockapi/services/responder.py
import asyncio
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

from starlette.datastructures import MutableHeaders
from starlette.responses import Response

from mockapi.storage.base import Storage

logger = logging.getLogger(__name__)

# statuses that must not carry a body
_BODYLESS = {204, 304}


@dataclass
class ResponseBuilder:
    """Response under construction; header names are case-insensitive, last write wins."""

    status: int = 200
    headers: MutableHeaders = field(default_factory=MutableHeaders)
    body: Any = None

    def apply_headers(self, headers: Mapping[str, str]) -> "ResponseBuilder":
        for name, value in headers.items():
            self.headers[name] = value
        return self

    def build(self) -> Response:
        if self.status < 200 or self.status in _BODYLESS:
            return Response(status_code=self.status, headers=self.headers)

        content = json.dumps(self.body, ensure_ascii=False, allow_nan=False, separators=(",", ":")).encode("utf-8")
        headers = self.headers
        if "content-type" not in headers:
            headers = MutableHeaders(raw=list(headers.raw))
            headers["Content-Type"] = "application/json"
        return Response(content=content, status_code=self.status, headers=headers)


class MockResponder:
    def __init__(self, storage: Storage):
        self.storage = storage

    async def handle(self, method: str, path: str) -> Response:
        settings = await self.storage.get_settings()
        endpoint = await self.storage.get_endpoint_by_path(path, method)

        if endpoint is None:
            logger.info(f"No mock for {method} {path}")
            builder = ResponseBuilder(status=404)
            builder.apply_headers(settings.default_headers)
            builder.body = {
                "error": "Not Found",
                "message": f"No mock endpoint configured for {method} {path}",
            }
            return builder.build()

        stub = endpoint.response
        if stub.delay and stub.delay > 0:
            await asyncio.sleep(stub.delay / 1000)

        if stub.status < 200:
            logger.warning(
                f"Endpoint {endpoint.id} answers {method} {path} with informational status {stub.status}; "
                "HTTP/1.1 servers cannot send it as a final response"
            )

        builder = ResponseBuilder(status=stub.status, body=stub.body)
        builder.apply_headers(settings.default_headers)
        builder.apply_headers(stub.headers)
        logger.info(f"Mock {method} {path} -> {stub.status} (endpoint {endpoint.id})")
        return builder.build()
