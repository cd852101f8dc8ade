"""
LLM client used by game generation (OpenAI-compatible or Ollama)
"""

import logging
import re
from typing import Any, Dict, Mapping, Optional

import httpx

from jeopardy.core.config import settings
from jeopardy.core.exceptions import UpstreamError

logger = logging.getLogger(__name__)

OPENAI = "OPENAI"
OLLAMA = "OLLAMA"

_PLACEHOLDER = re.compile(r"\{\{\s*(\w+)\s*\}\}")


def fill_template(template: str, values: Mapping[str, Any]) -> str:
    """Substitute ``{{name}}`` placeholders; unknown names are left as-is"""
    def _sub(match):
        key = match.group(1)
        return str(values[key]) if key in values else match.group(0)
    return _PLACEHOLDER.sub(_sub, template)


class LLMService:
    """Single-prompt text completion over HTTP"""

    def __init__(self, api_type: Optional[str] = None, base_url: Optional[str] = None,
                 api_key: Optional[str] = None, model: Optional[str] = None,
                 timeout: Optional[int] = None, max_tokens: Optional[int] = None):
        self.api_type = (api_type or settings.LLM_API_TYPE).upper()
        self.base_url = (base_url or settings.LLM_BASE_URL).rstrip('/')
        self.api_key = api_key if api_key is not None else settings.LLM_API_KEY
        self.model = model or settings.LLM_MODEL
        self.timeout = timeout or settings.LLM_TIMEOUT
        self.max_tokens = max_tokens or settings.LLM_MAX_TOKENS

        if self.api_type not in (OPENAI, OLLAMA):
            raise ValueError(f"Unsupported LLM_API_TYPE '{self.api_type}'")

    def _build_api_url(self) -> str:
        """Complete endpoint for the configured API flavour"""
        if self.api_type == OLLAMA:
            return f"{self.base_url}/api/generate"
        if self.base_url.endswith('/v1/chat/completions'):
            return self.base_url
        if self.base_url.endswith('/v1'):
            return f"{self.base_url}/chat/completions"
        return f"{self.base_url}/v1/chat/completions"

    def _build_request_body(self, prompt: str) -> Dict[str, Any]:
        if self.api_type == OLLAMA:
            return {"model": self.model, "prompt": prompt, "stream": False}
        return {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "stream": False,
            "max_tokens": self.max_tokens,
            "temperature": 0.7,
        }

    def _build_headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key and self.api_key.strip():
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    @staticmethod
    def _extract_text(api_type: str, data: Dict[str, Any]) -> str:
        if api_type == OLLAMA:
            text = data.get("response")
        else:
            choices = data.get("choices") or []
            text = choices[0].get("message", {}).get("content") if choices else None
        if not text or not str(text).strip():
            raise UpstreamError("LLM returned an empty response")
        return text

    async def complete(self, prompt: str) -> str:
        """Send one prompt and return the generated text"""
        url = self._build_api_url()
        logger.info("LLM request -> %s (model=%s, %d chars)", url, self.model, len(prompt))

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(url, json=self._build_request_body(prompt),
                                             headers=self._build_headers())
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error("LLM request failed: HTTP %s %s", e.response.status_code, e.response.text[:200])
            raise UpstreamError(f"LLM request failed with HTTP {e.response.status_code}")
        except httpx.HTTPError as e:
            logger.error("LLM request failed: %s", e)
            raise UpstreamError(f"LLM request failed: {e}")
        except ValueError:
            raise UpstreamError("LLM returned a non-JSON response")

        return self._extract_text(self.api_type, data)

    async def generate_from_template(self, template: str, values: Mapping[str, Any]) -> str:
        return await self.complete(fill_template(template, values))
