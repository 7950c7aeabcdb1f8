"""Content fetcher: Sanity queries with a single base-locale fallback.

Every call is independent: nothing is cached between calls, and the
primary and fallback requests are issued one after the other.
"""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from hydration.config import SanityConfig
from hydration.models.content import ContentRecord
from hydration.services.groq import build_list_query, build_query_url, build_single_query
from hydration.services.http_client import sanity_api_get
from hydration.services.locale import fallback_locales

logger = logging.getLogger(__name__)


def parse_records(result: Any) -> list[ContentRecord]:
    """Validate a ``result`` array, skipping entries that are not usable records."""
    if not isinstance(result, list):
        return []
    records: list[ContentRecord] = []
    for item in result:
        record = parse_record(item)
        if record is not None:
            records.append(record)
    return records


def parse_record(item: Any) -> ContentRecord | None:
    if not isinstance(item, dict):
        return None
    try:
        return ContentRecord.model_validate(item)
    except ValidationError as e:
        logger.warning(
            "Skipping invalid record %r: %d error(s)",
            item.get("slug"),
            e.error_count(),
        )
        return None


class ContentFetcher:
    """Fetches posts for a locale, retrying once against the base locale."""

    def __init__(
        self,
        config: SanityConfig,
        *,
        base_locale: str = "en",
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config
        self._base_locale = base_locale
        self._client = client

    async def _query(self, groq: str, context: str) -> Any:
        url = build_query_url(self._config, groq)
        envelope = await sanity_api_get(
            url, client=self._client, timeout=self._config.timeout, context=context
        )
        if envelope is None:
            return None
        return envelope.get("result")

    async def fetch_list(self, locale: str) -> list[ContentRecord]:
        """Posts for *locale*, newest first; the base locale's when *locale* has none.

        Returns an empty list when nothing is found or every request fails.
        """
        for attempt in fallback_locales(locale, self._base_locale):
            result = await self._query(build_list_query(attempt), f"list {attempt}")
            records = parse_records(result)
            if records:
                if attempt != locale:
                    logger.info(
                        "No %s posts, using %d %s posts", locale, len(records), attempt
                    )
                return records
        return []

    async def fetch_one(self, locale: str, slug: str) -> ContentRecord | None:
        """The post with *slug* in *locale*, else in the base locale, else None."""
        for attempt in fallback_locales(locale, self._base_locale):
            result = await self._query(
                build_single_query(attempt, slug), f"{slug} {attempt}"
            )
            record = parse_record(result)
            if record is not None:
                if attempt != locale:
                    logger.info("Post %r not found in %s, using %s", slug, locale, attempt)
                return record
        return None
