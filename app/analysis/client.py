"""Client for the external text-generation service used for narrative analysis.

Talks to any OpenAI-compatible chat completions endpoint in JSON mode. The
SDK client is created lazily on first use so the app starts without an API
key configured. Each call is a single best-effort attempt bounded by a
timeout; failures surface as ``NarrativeAnalysisError``.
"""
import asyncio
import json
import logging
import os
from typing import Any, List, Optional, Sequence
from pydantic import ValidationError

from app.analysis.prompts import ANALYSIS_PROMPT, RESPONSE_SCHEMA, SYSTEM_PROMPT
from app.analysis.schemas import (
    AnalysisContextItem,
    NarrativeAnalysis,
)
from app.surveys.models import SurveyRecord

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_TIMEOUT_SECONDS = 30.0


class NarrativeAnalysisError(Exception):
    """Transport, timeout, parse or schema failure of an analysis request"""


def build_analysis_context(records: Sequence[SurveyRecord]) -> List[dict]:
    """Reduce records to the fields relevant for text analysis"""
    return [AnalysisContextItem.from_record(r).model_dump() for r in records]


def build_prompt(records: Sequence[SurveyRecord]) -> str:
    """Instruction text plus the JSON-encoded reduced record set"""
    data = json.dumps(build_analysis_context(records), ensure_ascii=False)
    return ANALYSIS_PROMPT.format(data=data)


def parse_analysis(raw: Optional[str]) -> NarrativeAnalysis:
    """
    Parse the raw model output into a NarrativeAnalysis.

    Raises:
        NarrativeAnalysisError: empty output, invalid JSON or wrong shape
    """
    if not raw:
        raise NarrativeAnalysisError("empty response")
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise NarrativeAnalysisError(f"response is not JSON: {e}") from e
    try:
        return NarrativeAnalysis.model_validate(data)
    except ValidationError as e:
        raise NarrativeAnalysisError(f"response does not match schema: {e.error_count()} error(s)") from e


class NarrativeAnalysisClient:
    """
    Narrative analysis over an OpenAI-compatible endpoint.

    Settings default to the ANALYSIS_* environment variables.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.api_key = api_key or os.getenv("ANALYSIS_API_KEY")
        self.base_url = base_url or os.getenv("ANALYSIS_BASE_URL")
        self.model = model or os.getenv("ANALYSIS_MODEL", DEFAULT_MODEL)
        self.timeout = timeout if timeout is not None else float(
            os.getenv("ANALYSIS_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS)
        )
        self._client: Any = None

    def _get_client(self) -> Any:
        """Lazy-initialize the async SDK client."""
        if self._client is None:
            import openai

            self._client = openai.AsyncOpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=self.timeout,
                max_retries=0,
            )
        return self._client

    async def _complete(self, prompt: str) -> Optional[str]:
        client = self._get_client()
        response = await client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {
                    "role": "user",
                    "content": f"{prompt}\n\nJSON schema:\n{json.dumps(RESPONSE_SCHEMA)}",
                },
            ],
            response_format={"type": "json_object"},
        )
        return response.choices[0].message.content

    async def generate(self, records: Sequence[SurveyRecord]) -> NarrativeAnalysis:
        """
        Request a narrative analysis of the records.

        Raises:
            NarrativeAnalysisError: on any failure, including timeout
        """
        prompt = build_prompt(records)
        try:
            raw = await asyncio.wait_for(self._complete(prompt), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            raise NarrativeAnalysisError(f"timed out after {self.timeout:.0f}s") from e
        except Exception as e:
            raise NarrativeAnalysisError(f"request failed: {e}") from e
        return parse_analysis(raw)

    async def close(self) -> None:
        """Clean up the SDK client."""
        if self._client is not None:
            await self._client.close()
            self._client = None
