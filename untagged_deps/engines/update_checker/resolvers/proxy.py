"""Resolver backed by the GOPROXY HTTP protocol, with retries."""

from __future__ import annotations

import asyncio

import httpx
import structlog
from pydantic import ValidationError

from untagged_deps.core.config import DEFAULT_PROXY_URL
from untagged_deps.engines.update_checker.models import BranchLookup
from untagged_deps.engines.update_checker.resolvers.base import UNKNOWN_REVISION, ModuleInfo

log = structlog.get_logger("untagged_deps.resolver")

_MAX_RETRIES = 3
_RETRY_BASE_DELAY = 1.0  # seconds


def escape_path(value: str) -> str:
    """Case-encode a module path or version for use in a proxy URL.

    Every upper-case letter becomes ``!`` followed by its lower-case form,
    e.g. ``github.com/Azure/go`` -> ``github.com/!azure/go``.
    """
    out: list[str] = []
    for ch in value:
        if "A" <= ch <= "Z":
            out.append("!" + ch.lower())
        else:
            out.append(ch)
    return "".join(out)


class ProxyResolver:
    """Thin async client for ``GET <proxy>/<module>/@v/<branch>.info``."""

    def __init__(
        self,
        proxy_url: str = DEFAULT_PROXY_URL,
        *,
        timeout: float = 60.0,
        retry_base_delay: float = _RETRY_BASE_DELAY,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._retry_base_delay = retry_base_delay
        self._client = httpx.AsyncClient(
            base_url=proxy_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
            follow_redirects=True,
        )

    # ── lifecycle ──────────────────────────────────────────────────────────

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> ProxyResolver:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    # ── public ─────────────────────────────────────────────────────────────

    async def resolve(self, module_path: str, branch: str) -> BranchLookup:
        url = f"/{escape_path(module_path)}/@v/{escape_path(branch)}.info"
        try:
            resp = await self._request_with_retry(url)
        except httpx.HTTPError as exc:
            return BranchLookup.failed(branch, f"querying module proxy: {exc}")

        if resp.status_code == 200:
            try:
                info = ModuleInfo.model_validate_json(resp.content)
            except ValidationError as exc:
                return BranchLookup.failed(branch, f"parsing module info: {exc}")
            log.debug("resolver.found", module=module_path, branch=branch, version=info.Version)
            return BranchLookup.found(branch, info.Version)

        body = resp.text.strip()
        if resp.status_code in (404, 410) and UNKNOWN_REVISION in body:
            log.debug("resolver.not_found", module=module_path, branch=branch)
            return BranchLookup.not_found(branch, body)
        return BranchLookup.failed(branch, f"module proxy returned {resp.status_code}: {body}")

    # ── internal ───────────────────────────────────────────────────────────

    async def _request_with_retry(self, url: str) -> httpx.Response:
        """GET with exponential backoff on 5xx and timeout errors.

        The last 5xx response is returned as-is once retries run out.
        """
        last_exc: Exception | None = None
        resp: httpx.Response | None = None
        for attempt in range(_MAX_RETRIES):
            try:
                resp = await self._client.get(url)
                if resp.status_code < 500:
                    return resp

                log.warning(
                    "proxy.server_error",
                    url=url,
                    status=resp.status_code,
                    attempt=attempt + 1,
                    max_retries=_MAX_RETRIES,
                )
                last_exc = None
            except httpx.TimeoutException as exc:
                log.warning(
                    "proxy.timeout",
                    url=url,
                    attempt=attempt + 1,
                    max_retries=_MAX_RETRIES,
                )
                last_exc = exc

            if attempt < _MAX_RETRIES - 1:
                delay = self._retry_base_delay * (2**attempt)
                await asyncio.sleep(delay)

        if last_exc is None and resp is not None:
            return resp
        raise last_exc  # type: ignore[misc]
