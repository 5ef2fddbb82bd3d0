"""
Azure Translator gateway implementation.
"""

from typing import Any, Callable, Dict, List, Optional

import httpx
import structlog

from .base import BaseTranslatorGateway, UpstreamError, dictionary_target
from ..config import AppConfig
from ..utils.http_client import HTTPClient

logger = structlog.get_logger(__name__)

MALFORMED_RESPONSE_MESSAGE = "Unexpected response from translator service"


def _upstream_message(response: httpx.Response) -> Optional[str]:
    """Return ``error.message`` from an upstream error body, if any."""
    try:
        payload = response.json()
    except ValueError:
        return None
    if isinstance(payload, dict) and isinstance(payload.get("error"), dict):
        message = payload["error"].get("message")
        if isinstance(message, str) and message:
            return message
    return None


class AzureTranslatorGateway(BaseTranslatorGateway):
    """Gateway to the Azure Translator Text API (v3.0)."""

    def __init__(self, config: AppConfig, http_client: HTTPClient):
        """
        Initialize the gateway.

        Args:
            config: Application configuration holding the translator credentials
            http_client: HTTP client whose base URL is the translator endpoint
        """
        self.config = config
        self.http_client = http_client
        self.api_version = config.api_version

        self.http_client.set_default_headers({
            "Ocp-Apim-Subscription-Key": config.key,
            "Ocp-Apim-Subscription-Region": config.location,
            "Content-Type": "application/json",
        })

    async def _call(
        self,
        label: str,
        method: str,
        route: str,
        params: Optional[Dict[str, str]] = None,
        text: Optional[str] = None,
    ) -> Any:
        """Perform one upstream call and return the decoded JSON body."""
        query = {"api-version": self.api_version}
        if params:
            query.update(params)

        kwargs: Dict[str, Any] = {"params": query}
        if text is not None:
            kwargs["json"] = [{"text": text}]

        try:
            response = await self.http_client.request(method, route, **kwargs)
        except httpx.TimeoutException as e:
            logger.error(label, route=route, error=repr(e))
            raise UpstreamError("Translator service timed out") from e
        except httpx.HTTPError as e:
            logger.error(label, route=route, error=repr(e))
            raise UpstreamError(str(e) or "Could not reach translator service") from e

        if response.is_error:
            logger.error(
                label,
                route=route,
                status_code=response.status_code,
                detail=response.text,
            )
            message = _upstream_message(response)
            raise UpstreamError(
                message or f"Request failed with status code {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            logger.error(label, route=route, error="Response body is not JSON", detail=response.text)
            raise UpstreamError(MALFORMED_RESPONSE_MESSAGE, status_code=response.status_code) from e

    @staticmethod
    def _extract(label: str, data: Any, getter: Callable[[Any], Any]) -> Any:
        """Pull the result field out of an upstream body."""
        try:
            return getter(data)
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            logger.error(label, error="Unexpected response shape", detail=data)
            raise UpstreamError(MALFORMED_RESPONSE_MESSAGE) from e

    async def list_languages(self) -> Dict[str, str]:
        label = "Languages Retrieval Error"
        data = await self._call(label, "GET", "/languages")
        return self._extract(
            label,
            data,
            lambda d: {code: info["name"] for code, info in d["translation"].items()},
        )

    async def translate(self, text: str, to_language: str, from_language: str = "en") -> str:
        label = "Translation Error"
        data = await self._call(
            label,
            "POST",
            "/translate",
            params={"from": from_language, "to": to_language},
            text=text,
        )
        return self._extract(label, data, lambda d: d[0]["translations"][0]["text"])

    async def transliterate(self, text: str, language: str, from_script: str, to_script: str) -> str:
        label = "Transliteration Error"
        data = await self._call(
            label,
            "POST",
            "/transliterate",
            params={
                "language": language,
                "fromScript": from_script,
                "toScript": to_script,
            },
            text=text,
        )
        return self._extract(label, data, lambda d: d[0]["text"])

    async def detect(self, text: str) -> str:
        label = "Detection Error"
        data = await self._call(label, "POST", "/detect", text=text)
        return self._extract(label, data, lambda d: d[0]["language"])

    async def break_sentence(self, text: str, language: str) -> List[int]:
        # language is validated by the caller but the upstream detects it itself.
        label = "Sentence Breaking Error"
        data = await self._call(label, "POST", "/breaksentence", text=text)
        return self._extract(label, data, lambda d: d[0]["sentLen"])

    async def dictionary_lookup(self, text: str, language: str) -> List[Dict[str, Any]]:
        label = "Dictionary Lookup Error"
        data = await self._call(
            label,
            "POST",
            "/dictionary/lookup",
            params={"from": language, "to": dictionary_target(language)},
            text=text,
        )
        return self._extract(label, data, lambda d: d[0]["translations"])

    async def shutdown(self) -> None:
        """Close the underlying HTTP client."""
        await self.http_client.aclose()
