from __future__ import annotations

import hmac
import logging

from commission_shop.application.ports.admin_auth import AdminAuthPort


class StaticTokenAdminAuth(AdminAuthPort):
    def __init__(self, token: str | None, env: str = "dev") -> None:
        self._token = token
        self._env = env
        self._logger = logging.getLogger(__name__)

    def is_admin(self, token: str | None) -> bool:
        if not self._token:
            if self._env.lower() in {"dev", "local"}:
                self._logger.warning("ADMIN_API_TOKEN not set; accepting admin calls in dev mode")
                return True
            self._logger.error("ADMIN_API_TOKEN not set; rejecting admin call")
            return False
        if not token:
            return False
        return hmac.compare_digest(token.encode("utf-8"), self._token.encode("utf-8"))
