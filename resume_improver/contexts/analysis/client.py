"""
HTTP client for the analysis endpoint.

Sends a built AnalysisRequest and returns the raw status and body. Any
failure to obtain a response, including an endpoint URL httpx cannot
parse, becomes TransportError. HTTP error statuses are not errors here,
they are passed on for normalization.
"""

from typing import Optional

import httpx

from resume_improver.contexts.analysis.logger import _log_debug, _log_error
from resume_improver.contexts.analysis.models import AnalysisRequest, AnalysisResponse
from resume_improver.exceptions import TransportError

DEFAULT_TIMEOUT = 120.0


class AnalysisClient:
    """
    Thin async wrapper around httpx for one analysis endpoint.

    Args:
        timeout: Seconds before a request counts as a connectivity failure
        transport: Optional httpx transport (tests pass httpx.MockTransport)
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout
        self._transport = transport

    async def send(self, request: AnalysisRequest) -> AnalysisResponse:
        """
        Send request once. No retries.

        Raises:
            TransportError: No response could be obtained
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.request(request.method, request.url, **request.httpx_kwargs())
        except (httpx.RequestError, httpx.InvalidURL) as e:
            _log_error(f"No response from {request.url}: {type(e).__name__}: {e}")
            raise TransportError(original_error=e) from e

        _log_debug(f"HTTP {response.status_code} from {request.url} ({len(response.content)} bytes)")
        return AnalysisResponse(status_code=response.status_code, body=response.text)
