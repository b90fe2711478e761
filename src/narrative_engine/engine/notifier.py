"""Fire-and-forget "continue" action sent to the narrative service after a check."""
from __future__ import annotations

import json
import logging
import threading
import urllib.error
import urllib.request

from narrative_engine.models.skill_check import CheckResult

logger = logging.getLogger(__name__)

CONTINUE_PAYLOAD = {"action": "continue"}


def campaign_id_from_path(path: str) -> str | None:
    """'/campaigns/123/adventure' -> '123'."""
    parts = [p for p in path.split("?")[0].split("/") if p]
    for i, part in enumerate(parts[:-1]):
        if part == "campaigns":
            return parts[i + 1]
    return None


class ContinueNotifier:
    """Callable suitable for ``EngineOptions.on_resolved``.

    The POST runs on a daemon thread; its outcome is only logged.
    """

    def __init__(self, base_url: str, route: str = "", timeout: float = 5.0,
                 background: bool = True) -> None:
        self.base_url = base_url.rstrip("/")
        self.route = route
        self.timeout = timeout
        self.background = background

    def action_url(self, campaign_id: str) -> str:
        return f"{self.base_url}/api/campaigns/{campaign_id}/action"

    def __call__(self, result: CheckResult) -> None:
        campaign_id = campaign_id_from_path(self.route)
        if campaign_id is None:
            logger.error("Could not extract campaign ID from route %r; not advancing", self.route)
            return
        url = self.action_url(campaign_id)
        if self.background:
            threading.Thread(target=self.send, args=(url,), daemon=True).start()
        else:
            self.send(url)

    def send(self, url: str) -> bool:
        body = json.dumps(CONTINUE_PAYLOAD).encode()
        req = urllib.request.Request(
            url, data=body, headers={"Content-Type": "application/json"}, method="POST",
        )
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as resp:
                resp.read()
        except (urllib.error.URLError, ConnectionError, TimeoutError) as exc:
            logger.warning("Auto-advance request to %s failed: %s", url, exc)
            return False
        logger.info("Auto-advance sent to %s", url)
        return True
