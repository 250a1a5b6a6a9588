"""Debounced provider search for the membership wizard.

Every query change bumps a generation counter and replaces the pending
debounce task. A response is applied only if its generation is still the
latest, so a slow answer to an old query never overwrites a newer one.
"""

from __future__ import annotations

import asyncio
from typing import Optional

from libs.common.api_client import ApiError
from libs.common.config import get_settings
from libs.common.logging import get_logger
from services.memberships_service.client import MembershipApi
from services.memberships_service.schemas import ProviderCategory, ProviderSearchResult

logger = get_logger(__name__)


class ProviderSearch:
    def __init__(
        self,
        api: MembershipApi,
        *,
        debounce_seconds: Optional[float] = None,
        min_length: Optional[int] = None,
        limit: Optional[int] = None,
    ):
        settings = get_settings()
        self.api = api
        self.debounce_seconds = (
            settings.PROVIDER_SEARCH_DEBOUNCE_SECONDS
            if debounce_seconds is None
            else debounce_seconds
        )
        self.min_length = settings.PROVIDER_SEARCH_MIN_LENGTH if min_length is None else min_length
        self.limit = settings.PROVIDER_SEARCH_LIMIT if limit is None else limit

        self.results: list[ProviderSearchResult] = []
        self.loading = False
        self._generation = 0
        self._pending: Optional[asyncio.Task] = None

    @property
    def generation(self) -> int:
        return self._generation

    def is_searchable(
        self, category: Optional[ProviderCategory], region: Optional[str], query: str
    ) -> bool:
        return bool(category and region and len(query.strip()) >= self.min_length)

    async def fetch(
        self, category: Optional[ProviderCategory], region: Optional[str], query: str
    ) -> list[ProviderSearchResult]:
        """Run one search immediately. Failures yield an empty list."""
        if not self.is_searchable(category, region, query):
            return []
        try:
            return await self.api.search_providers(
                category=category, region=region, search=query.strip(), limit=self.limit
            )
        except ApiError as e:
            logger.warning(f"Error searching providers: {e.message}")
            return []

    def update(
        self, category: Optional[ProviderCategory], region: Optional[str], query: str
    ) -> asyncio.Task:
        """Schedule a debounced search for the new input and return its task."""
        self._generation += 1
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = asyncio.create_task(
            self._run(self._generation, category, region, query)
        )
        return self._pending

    async def _run(
        self,
        generation: int,
        category: Optional[ProviderCategory],
        region: Optional[str],
        query: str,
    ) -> None:
        if not self.is_searchable(category, region, query):
            self.results = []
            self.loading = False
            return

        await asyncio.sleep(self.debounce_seconds)
        if generation != self._generation:
            return
        self.loading = True
        try:
            results = await self.fetch(category, region, query)
        finally:
            if generation == self._generation:
                self.loading = False

        if generation != self._generation:
            logger.debug(f"Dropping stale provider search result for {query!r}")
            return
        self.results = results

    async def settle(self) -> None:
        """Wait for the pending search, if any."""
        if self._pending is not None:
            try:
                await self._pending
            except asyncio.CancelledError:
                pass

    def clear(self) -> None:
        self._generation += 1
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = None
        self.results = []
        self.loading = False
