"""Zefix (Swiss central business name index) registry client.

Talks to the Zefix public REST API with HTTP basic auth and reduces the
detailed company record to a CompanySnapshot.
"""

from __future__ import annotations

import re
from typing import Any

import httpx
import structlog

from regwatch.models.config import RegistryConfig
from regwatch.models.snapshot import Address, CompanySnapshot
from regwatch.registry.base import RegistryClient, RegistryError

_log = structlog.get_logger(component="registry.zefix")

_UID_RE = re.compile(r"^CHE-?\d{3}\.?\d{3}\.?\d{3}$", re.IGNORECASE)


def normalize_uid(uid: str) -> str:
    """Strip separators: ``CHE-123.456.789`` -> ``CHE123456789``."""
    return re.sub(r"[-.\s]", "", uid).upper()


class ZefixClient(RegistryClient):
    """Registry client for the Zefix public REST API.

    Args:
        config: Endpoint, credentials, timeout and display language.
        client: Optional pre-built ``httpx.AsyncClient`` (used by tests).
    """

    def __init__(self, config: RegistryConfig, client: httpx.AsyncClient | None = None) -> None:
        self._language = config.language
        self._client = client or httpx.AsyncClient(
            base_url=config.endpoint,
            auth=httpx.BasicAuth(config.username, config.password),
            timeout=config.timeout_seconds,
            headers={"Accept": "application/json"},
        )

    def is_valid_key(self, key: str) -> bool:
        return bool(key) and _UID_RE.match(key.strip()) is not None

    async def resolve(self, key: str) -> CompanySnapshot | None:
        uid = normalize_uid(key)
        payload = await self._request("GET", f"/api/v1/company/uid/{uid}")
        if payload is None:
            return None

        # The endpoint answers with a list of matches; a single object is accepted too.
        records = payload if isinstance(payload, list) else [payload]
        if not records:
            return None
        if len(records) > 1:
            _log.debug("zefix_multiple_records", uid=uid, count=len(records))
        if not isinstance(records[0], dict):
            raise RegistryError(f"Zefix returned an unexpected company record for {uid}: {records[0]!r:.200}")
        return normalize_company(records[0], self._language)

    async def search(self, name: str) -> list[str]:
        payload = await self._request(
            "POST",
            "/api/v1/company/search",
            json={"name": name, "activeOnly": True},
        )
        if not isinstance(payload, list):
            return []
        return [str(item["uid"]) for item in payload if isinstance(item, dict) and item.get("uid")]

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, url: str, json: dict[str, object] | None = None) -> Any:
        """Send one request; 404 maps to None, other failures raise RegistryError."""
        try:
            response = await self._client.request(method, url, json=json)
        except httpx.TimeoutException as exc:
            raise RegistryError(f"Zefix request timed out: {method} {url}") from exc
        except httpx.HTTPError as exc:
            raise RegistryError(f"Zefix request failed: {method} {url}: {exc}") from exc

        if response.status_code == 404:
            return None
        if not response.is_success:
            raise RegistryError(
                f"Zefix returned HTTP {response.status_code} for {method} {url}: {response.text[:200]}"
            )
        try:
            return response.json()
        except ValueError as exc:
            raise RegistryError(f"Zefix returned invalid JSON for {method} {url}") from exc


def normalize_company(details: dict[str, Any], language: str = "en") -> CompanySnapshot:
    """Reduce a Zefix company record to the tracked field set."""
    address = details.get("address") or {}
    return CompanySnapshot(
        uid=details.get("uid"),
        name=details.get("name"),
        legal_seat=details.get("legalSeat"),
        legal_form=_legal_form(details.get("legalForm"), language),
        status=details.get("status"),
        purpose=details.get("purpose"),
        canton=details.get("canton"),
        capital_nominal=_text(details.get("capitalNominal")),
        capital_currency=details.get("capitalCurrency"),
        address=Address(
            organisation=address.get("organisation"),
            care_of=address.get("careOf"),
            street=address.get("street"),
            house_number=address.get("houseNumber"),
            addon=address.get("addon"),
            po_box=address.get("poBox"),
            city=address.get("city"),
            swiss_zip_code=_text(address.get("swissZipCode")),
        ),
        detail_url=_localized(details.get("zefixDetailWeb"), language),
    )


def _legal_form(legal_form: Any, language: str) -> str | None:
    if not isinstance(legal_form, dict):
        return None
    name = _localized(legal_form.get("name"), language)
    short_name = _localized(legal_form.get("shortName"), language)
    if name is None and short_name is None:
        return None
    return f"{name} ({short_name})"


def _localized(value: Any, language: str) -> str | None:
    if isinstance(value, dict):
        return value.get(language)
    return value


def _text(value: Any) -> str | None:
    return None if value is None else str(value)
