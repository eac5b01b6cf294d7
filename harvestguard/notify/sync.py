"""Replays queued create/update/delete actions against the server."""

from typing import Optional

import httpx
from loguru import logger

from harvestguard.notify.queue import SyncQueue
from harvestguard.store.models import PendingAction
from harvestguard.utils.config import settings
from harvestguard.utils.constants import SYNC_RESOURCES
from harvestguard.utils.errors import SyncError

_UNSET = object()


class SyncService:
    """Owns the retry policy; the queue only counts failures."""

    def __init__(self, queue: SyncQueue, client: Optional[httpx.Client] = None, max_retries=_UNSET):
        self.queue = queue
        self.client = client or httpx.Client(
            base_url=settings.sync.base_url,
            timeout=settings.sync.timeout_seconds,
        )
        self.max_retries = settings.sync.max_retries if max_retries is _UNSET else max_retries

    def _request(self, action: PendingAction) -> httpx.Response:
        endpoint = SYNC_RESOURCES.get(action.resource)
        if endpoint is None:
            raise SyncError(f"Unknown resource type: {action.resource}")

        if action.type == "create":
            return self.client.post(endpoint, json=action.data)

        resource_id = action.data.get("_id") or action.data.get("id")
        if not resource_id:
            raise SyncError(f"{action.type} {action.resource} has no id")
        if action.type == "update":
            return self.client.put(f"{endpoint}/{resource_id}", json=action.data)
        if action.type == "delete":
            return self.client.delete(f"{endpoint}/{resource_id}")
        raise SyncError(f"Unknown action type: {action.type}")

    def sync_action(self, action: PendingAction) -> None:
        response = self._request(action)
        if response.is_error:
            raise SyncError(f"HTTP {response.status_code}: {response.text[:200]}", response.status_code)

    def sync_pending(self) -> dict:
        """Replay every pending action once."""
        success, failed = 0, 0

        for action in self.queue.pending():
            try:
                self.sync_action(action)
            except (httpx.HTTPError, SyncError) as e:
                failed += 1
                updated = self.queue.record_failure(action.id, str(e))
                retries = updated.retry_count if updated else action.retry_count + 1
                logger.warning(f"Sync failed for {action.type} {action.resource} ({retries} attempts): {e}")
                if self.max_retries is not None and retries >= self.max_retries:
                    logger.error(f"Dropping {action.type} {action.resource} {action.id} after {retries} attempts")
                    self.queue.remove(action.id)
                continue

            self.queue.remove(action.id)
            success += 1

        if success or failed:
            logger.info(f"Sync complete: {success} succeeded, {failed} failed")
        return {"success": success, "failed": failed}

    def close(self) -> None:
        self.client.close()
