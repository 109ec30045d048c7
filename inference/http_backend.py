"""
Shared HTTP template for hosted model backends.

Both vendor variants post one JSON document and read one JSON document
back; only the payload, the headers and the response shape differ.
Subclasses provide those three pieces, this class owns the transport and
the never-raise guarantee.

Guarantees:
- Never raises (returns GenerationResult.failed() on any failure)
- API keys never logged or put in the result
- Response schema validated via Pydantic
- asyncio.CancelledError is left to propagate so callers can cancel
"""

import logging
from abc import abstractmethod
from typing import Any, Dict, Optional, Tuple

import httpx
from pydantic import ValidationError

from .base import ModelBackend
from .types import GenerationRequest, GenerationResult

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 60.0

# Upper bound on how much of an error body ends up in a diagnostic
_MAX_ERROR_BODY_CHARS = 300


class EmptyResponseError(Exception):
    """Raised by a subclass parser when the response carries no candidates."""


class HTTPModelBackend(ModelBackend):
    """
    Base class for backends that talk JSON over HTTPS.

    Subclasses implement:
        _build_payload(request)  -> dict posted as JSON
        _build_headers()         -> auth / protocol headers
        _parse_response(data)    -> (text, tokens_used); raise
                                    EmptyResponseError when there is nothing
                                    to return
    """

    endpoint: str = ""

    def __init__(
        self,
        api_key: str,
        model: str,
        endpoint: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT_S,
    ):
        if not api_key:
            raise ValueError(f"{self.provider_name} API key is required")
        self._api_key = api_key
        self.model = model
        self.endpoint = endpoint or self.endpoint
        self.timeout = timeout

    # ── Subclass hooks ────────────────────────────────────────

    @abstractmethod
    def _build_payload(self, request: GenerationRequest) -> Dict[str, Any]:
        raise NotImplementedError

    @abstractmethod
    def _build_headers(self) -> Dict[str, str]:
        raise NotImplementedError

    @abstractmethod
    def _parse_response(self, data: Any) -> Tuple[str, int]:
        raise NotImplementedError

    # ── Primary interface ─────────────────────────────────────

    async def send(self, request: GenerationRequest) -> GenerationResult:
        """
        Post the request and normalize the reply.

        Failure diagnostics:
            timeout          -> "Error calling <provider>: request timed out after Ns"
            non-2xx status   -> "Error calling <provider>: HTTP <code> ..."
            transport error  -> "Error calling <provider>: <exception text>"
            bad JSON/schema  -> "Error calling <provider>: invalid response ..."
            no candidates    -> "No response from <provider>"
        """
        payload = self._build_payload(request)
        headers = {"Content-Type": "application/json", **self._build_headers()}

        logger.debug(
            f"{self.provider_name} request: model={self.model} "
            f"max_tokens={request.max_tokens} temperature={request.temperature}"
        )

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.endpoint, json=payload, headers=headers)
                response.raise_for_status()
                data = response.json()

        except httpx.TimeoutException:
            return self._failure(f"request timed out after {self.timeout}s")

        except httpx.HTTPStatusError as e:
            body = (e.response.text or "")[:_MAX_ERROR_BODY_CHARS]
            detail = f"HTTP {e.response.status_code}"
            if body:
                detail = f"{detail}: {body}"
            return self._failure(detail)

        except ValueError as e:
            # response.json() on a non-JSON body
            return self._failure(f"invalid response body ({e})")

        except Exception as e:
            return self._failure(str(e) or type(e).__name__)

        try:
            text, tokens_used = self._parse_response(data)
        except EmptyResponseError:
            message = f"No response from {self.provider_name}"
            logger.warning(message)
            return GenerationResult.failed(model=self.model, error_message=message)
        except ValidationError as e:
            return self._failure(f"invalid response shape ({e.error_count()} validation errors)")
        except Exception as e:
            return self._failure(f"invalid response shape ({type(e).__name__}: {e})")

        return GenerationResult.succeeded(content=text, model=self.model, tokens_used=tokens_used)

    def _failure(self, detail: str) -> GenerationResult:
        message = f"Error calling {self.provider_name}: {detail}"
        logger.warning(message)
        return GenerationResult.failed(model=self.model, error_message=message)
