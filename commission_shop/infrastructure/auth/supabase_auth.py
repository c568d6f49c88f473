from __future__ import annotations

import logging

import httpx

from commission_shop.application.ports.admin_auth import AdminAuthPort


class SupabaseAdminAuth(AdminAuthPort):
    """Any signed-in user of the hosted auth service is an admin (single-artist site)."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ) -> None:
        if not base_url or not api_key:
            raise ValueError("SUPABASE_URL and SUPABASE_ANON_KEY are required for Supabase auth")
        self._user_url = base_url.rstrip("/") + "/auth/v1/user"
        self._api_key = api_key
        self._client = client or httpx.Client(timeout=timeout)
        self._logger = logging.getLogger(__name__)

    def is_admin(self, token: str | None) -> bool:
        if not token:
            return False
        try:
            resp = self._client.get(
                self._user_url,
                headers={"apikey": self._api_key, "Authorization": f"Bearer {token}"},
            )
        except httpx.HTTPError as e:
            self._logger.error("Auth service unreachable", extra={"error": str(e)})
            return False
        if resp.status_code != 200:
            self._logger.info("Admin token rejected", extra={"status": resp.status_code})
            return False
        return bool(resp.json().get("id"))
