"""Polls the rate board API and feeds the rotation scheduler."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import httpx

from rateboard.core.logging import log_event
from .rotation import RotationScheduler

logger = logging.getLogger(__name__)

# resource name -> API path (relative to the base URL)
ENDPOINTS: Dict[str, str] = {
    "rates": "/api/v1/rates/current",
    "settings": "/api/v1/settings/display",
    "media": "/api/v1/media/?active=true",
    "promos": "/api/v1/promo/?active=true",
    "banner": "/api/v1/banner/",
}


@dataclass
class DisplayData:
    """Last good payload per resource; a key is absent until its first successful fetch."""

    payloads: Dict[str, Any] = field(default_factory=dict)
    failures: Dict[str, int] = field(default_factory=dict)

    def get(self, name: str) -> Any:
        return self.payloads.get(name)

    @property
    def rates(self) -> Optional[Dict[str, Any]]:
        return self.payloads.get("rates")

    @property
    def banner(self) -> Optional[Dict[str, Any]]:
        return self.payloads.get("banner")


class DisplayPoller:
    """One round-trip per resource per poll; failures keep the previous data."""

    def __init__(self, base_url: str, scheduler: RotationScheduler, *, timeout: float = 10.0) -> None:
        self.base_url = base_url.rstrip("/")
        self.scheduler = scheduler
        self.timeout = timeout
        self.data = DisplayData()

    async def _fetch(self, client: httpx.AsyncClient, name: str, path: str) -> None:
        url = f"{self.base_url}{path}"
        try:
            resp = await client.get(url)
        except httpx.HTTPError as exc:
            self._record_failure(name, url, error=str(exc))
            return

        if resp.status_code // 100 != 2:
            self._record_failure(name, url, status=resp.status_code)
            return

        try:
            payload = resp.json()
        except ValueError:
            self._record_failure(name, url, error="invalid json")
            return

        self.data.payloads[name] = payload
        self.data.failures.pop(name, None)

    def _record_failure(self, name: str, url: str, **fields: object) -> None:
        count = self.data.failures.get(name, 0) + 1
        self.data.failures[name] = count
        log_event(
            "display_poll_failed",
            log=logger,
            level=logging.WARNING,
            resource=name,
            url=url,
            consecutive=count,
            **fields,
        )

    async def poll_once(self) -> DisplayData:
        async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
            for name, path in ENDPOINTS.items():
                await self._fetch(client, name, path)

        media = self.data.get("media")
        promos = self.data.get("promos")
        self.scheduler.load(
            settings=self.data.get("settings"),
            media=media if isinstance(media, list) else None,
            promos=promos if isinstance(promos, list) else None,
        )
        log_event(
            "display_poll_done",
            log=logger,
            level=logging.DEBUG,
            loaded=sorted(self.data.payloads),
            failing=sorted(self.data.failures),
        )
        return self.data
