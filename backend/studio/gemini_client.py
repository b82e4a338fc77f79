from __future__ import annotations
import logging
import httpx
from typing import Any, Dict, Optional
from .errors import ConfigurationError, GenerationError
from .settings import Settings, settings

logger = logging.getLogger(__name__)

class GeminiClient:
	def __init__(
		self,
		api_key: Optional[str] = None,
		*,
		base_url: Optional[str] = None,
		model: Optional[str] = None,
		config: Optional[Settings] = None,
		http_client: Optional[httpx.AsyncClient] = None,
	) -> None:
		config = config or settings
		self.api_key = api_key or config.gemini_api_key
		if not self.api_key:
			raise ConfigurationError("GEMINI_API_KEY is not configured")
		self.model = model or config.gemini_model
		self.provider = config.gemini_provider
		if self.provider == "vertex":
			region = config.vertex_region
			project = config.vertex_project or "placeholder-project"
			# Vertex AI Generative REST endpoint (API key via header)
			self.base_url = base_url or (
				f"https://{region}-aiplatform.googleapis.com/v1/projects/{project}/locations/{region}/publishers/google/models/{self.model}:generateContent"
			)
			self._auth_in_query = False
		else:
			# Google AI Studio (Generative Language API)
			self.base_url = base_url or f"https://generativelanguage.googleapis.com/v1beta/models/{self.model}:generateContent"
			self._auth_in_query = True
		# A caller-supplied http_client stays open; the caller closes it
		self._owns_client = http_client is None
		self._client = http_client or httpx.AsyncClient(timeout=config.gemini_timeout_seconds)

	async def generate(self, prompt: str) -> str:
		payload: Dict[str, Any] = {"contents": [{"parts": [{"text": prompt}]}]}
		return await self._post_payload(payload)

	async def _post_payload(self, payload: Dict[str, Any]) -> str:
		params: Dict[str, Any] = {}
		headers: Dict[str, str] = {}
		if self._auth_in_query:
			params["key"] = self.api_key
		else:
			headers["x-goog-api-key"] = self.api_key
		# Single attempt: a failed call is reported, the user resubmits
		try:
			r = await self._client.post(self.base_url, params=params, headers=headers, json=payload)
			r.raise_for_status()
		except httpx.HTTPStatusError as http_err:
			status = http_err.response.status_code
			logger.warning("Gemini returned HTTP %s for model %s", status, self.model)
			raise GenerationError(f"Gemini request failed (HTTP {status})") from http_err
		except httpx.RequestError as net_err:
			logger.warning("Gemini request error for model %s: %s", self.model, net_err)
			raise GenerationError("Gemini request failed (network error)") from net_err
		try:
			data = r.json()
			return data["candidates"][0]["content"]["parts"][0]["text"]
		except (ValueError, KeyError, IndexError, TypeError) as err:
			logger.warning("Unexpected Gemini response: %s", r.text[:500])
			raise GenerationError("Unexpected Gemini response") from err

	async def aclose(self) -> None:
		if self._owns_client:
			await self._client.aclose()
