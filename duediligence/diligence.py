from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Dict, List, Optional

from openai import AsyncOpenAI, OpenAIError

from .config import Settings


logger = logging.getLogger(__name__)

QUERY_TEMPLATES = (
    "Is {company} a legitimate company",
    "Reviews of {company}",
    "Legal issues related to {company}",
)

QUERY_FAILED = "No se pudo completar la consulta: {query}"
DILIGENCE_FAILED = "Falló la consulta de due diligence."


def build_queries(company_name: str) -> List[str]:
    return [template.format(company=company_name) for template in QUERY_TEMPLATES]


def _field(item: Any, name: str) -> Any:
    if isinstance(item, dict):
        return item.get(name)
    return getattr(item, name, None)


def _dump(part: Any) -> Any:
    if hasattr(part, "model_dump"):
        return part.model_dump(mode="json")
    return part


def extract_content(response: Any) -> Optional[List[Any]]:
    """Return the content parts of the first assistant message in a Responses API result.

    Web-search responses usually put a ``web_search_call`` item ahead of the
    message, but the position is not guaranteed, so the output is scanned for
    the first ``message`` item carrying content. Returns ``None`` when there is
    nothing to extract.
    """
    output = _field(response, "output")
    if not isinstance(output, (list, tuple)):
        return None
    for item in output:
        if _field(item, "type") != "message":
            continue
        content = _field(item, "content")
        if isinstance(content, (list, tuple)) and content:
            return [_dump(part) for part in content]
    return None


class DueDiligenceAnalyst:
    def __init__(self, settings: Settings, client: Any = None):
        self.settings = settings
        if client is None and not settings.openai_api_key:
            logger.warning("OPENAI_API_KEY is not configured. Due diligence lookups will fail until set.")
        self._client = client

    @property
    def openai(self) -> Any:
        # built on first use so a missing key fails the lookup, not the import
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self.settings.openai_api_key,
                timeout=self.settings.request_timeout,
                max_retries=0,
            )
        return self._client

    async def run(self, company_name: str) -> Dict[str, Any]:
        start_time = time.perf_counter()
        queries = build_queries(company_name)
        results = await asyncio.gather(
            *(self._lookup(query) for query in queries),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException) and not isinstance(result, OpenAIError):
                raise result
        api_errors = [result for result in results if isinstance(result, OpenAIError)]
        if api_errors:
            logger.error("Due diligence failed for %r: %s", company_name, api_errors[0])
            return {"error": DILIGENCE_FAILED}
        logger.info(
            "Due diligence for %r finished in %.2fs",
            company_name,
            time.perf_counter() - start_time,
        )
        return {f"query{idx}": result for idx, result in enumerate(results, start=1)}

    async def _lookup(self, query: str) -> Any:
        response = await self.openai.responses.create(
            model=self.settings.openai_model,
            tools=[{"type": self.settings.web_search_tool}],
            input=query,
        )
        content = extract_content(response)
        if content is None:
            logger.warning("No content could be extracted for query %r", query)
            return {"error": QUERY_FAILED.format(query=query)}
        return content
