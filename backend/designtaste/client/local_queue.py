"""
Client-side processing queue.

Captured elements are persisted to a JSON file and posted to the backend in
small concurrent batches, highest priority first. There is no retry: a
failed post leaves the item in ``error`` for the user to inspect or clear.
"""
import asyncio
import json
import logging
import time
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Awaitable, Callable

import httpx

from designtaste.config import settings
from designtaste.utils.filesystem import ensure_data_dir

logger = logging.getLogger(__name__)

BATCH_SIZE = 3
DRAIN_DELAY_SECONDS = 1.0
DEFAULT_PRIORITY = 1
INSPIRATION_PRIORITY = 2

Scheduler = Callable[[float, Callable[[], Awaitable[Any]]], Any]


def _now_ms() -> int:
    return int(time.time() * 1000)


def _new_id(prefix: str) -> str:
    return f"{prefix}_{_now_ms()}_{uuid.uuid4().hex[:9]}"


@dataclass
class QueuedElement:
    id: str
    url: str
    element_data: dict
    screenshot: str
    status: str = "queued"
    priority: int = DEFAULT_PRIORITY
    timestamp: int = field(default_factory=_now_ms)
    processed_at: int | None = None
    error_message: str | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "url": self.url,
            "elementData": self.element_data,
            "screenshot": self.screenshot,
            "status": self.status,
            "priority": self.priority,
            "timestamp": self.timestamp,
            "processedAt": self.processed_at,
            "errorMessage": self.error_message,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "QueuedElement":
        return cls(
            id=data["id"],
            url=data.get("url", ""),
            element_data=data.get("elementData") or {},
            screenshot=data.get("screenshot", ""),
            status=data.get("status", "queued"),
            priority=data.get("priority", DEFAULT_PRIORITY),
            timestamp=data.get("timestamp") or _now_ms(),
            processed_at=data.get("processedAt"),
            error_message=data.get("errorMessage"),
        )


@dataclass
class QueueState:
    items: list[QueuedElement] = field(default_factory=list)
    draining: bool = False


class QueueStorage:
    def __init__(self, path: Path | None = None):
        self.path = path or settings.queue_path

    def load(self) -> list[QueuedElement]:
        if not self.path.exists():
            return []
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning("Queue file %s is not valid JSON, starting empty", self.path)
            return []
        return [QueuedElement.from_dict(item) for item in raw.get("processingQueue", [])]

    def save(self, items: list[QueuedElement]):
        ensure_data_dir(self.path.parent)
        payload = {"processingQueue": [item.to_dict() for item in items]}
        self.path.write_text(json.dumps(payload), encoding="utf-8")


_background_tasks: set[asyncio.Task] = set()


def asyncio_scheduler(delay: float, callback: Callable[[], Awaitable[Any]]):
    loop = asyncio.get_running_loop()

    def fire():
        task = loop.create_task(callback())
        _background_tasks.add(task)
        task.add_done_callback(_background_tasks.discard)

    return loop.call_later(delay, fire)


class LocalProcessingQueue:
    def __init__(
        self,
        storage: QueueStorage | None = None,
        backend_url: str | None = None,
        client: httpx.AsyncClient | None = None,
        scheduler: Scheduler | None = None,
        batch_size: int = BATCH_SIZE,
        drain_delay: float = DRAIN_DELAY_SECONDS,
    ):
        self.storage = storage or QueueStorage()
        self.backend_url = (backend_url or settings.backend_url).rstrip("/")
        self._client = client
        self._scheduler = scheduler or asyncio_scheduler
        self.batch_size = batch_size
        self.drain_delay = drain_delay
        self.state = QueueState(items=self.storage.load())

    @property
    def items(self) -> list[QueuedElement]:
        return self.state.items

    @property
    def queued_count(self) -> int:
        return sum(1 for item in self.state.items if item.status == "queued")

    @property
    def process_url(self) -> str:
        return f"{self.backend_url}{settings.api_prefix}/elements/process"

    def _persist(self):
        self.storage.save(self.state.items)

    def enqueue(self, element_data: dict, screenshot: str, url: str, priority: int = DEFAULT_PRIORITY) -> str:
        item = QueuedElement(
            id=_new_id("element"), url=url, element_data=element_data, screenshot=screenshot, priority=priority
        )
        self.state.items.append(item)
        self._persist()
        logger.info("Queued %s (%d total)", item.id, len(self.state.items))
        return item.id

    def enqueue_inspiration_request(
        self,
        element_data: dict,
        prompt: str,
        url: str,
        screenshot: str,
        element_screenshot: str | None = None,
    ) -> str:
        data = {
            **element_data,
            "userPrompt": prompt,
            "requestType": "inspiration",
            "elementScreenshot": element_screenshot,
        }
        item = QueuedElement(
            id=_new_id("inspiration"),
            url=url,
            element_data=data,
            screenshot=screenshot,
            priority=INSPIRATION_PRIORITY,
        )
        self.state.items.append(item)
        self._persist()
        logger.info("Queued inspiration request %s: %r", item.id, prompt)
        return item.id

    def clear(self):
        self.state.items = []
        self._persist()

    async def process_one(self, item: QueuedElement, client: httpx.AsyncClient):
        item.status = "processing"
        self._persist()

        payload = {"id": item.id, "elementData": item.element_data, "screenshot": item.screenshot, "url": item.url}
        try:
            response = await client.post(self.process_url, json=payload)
            if response.is_success:
                item.status = "completed"
                item.error_message = None
            else:
                logger.error("Backend rejected %s: %s %s", item.id, response.status_code, response.text)
                item.status = "error"
                item.error_message = f"API request failed: {response.status_code}"
        except httpx.HTTPError as exc:
            logger.error("Posting %s failed: %s", item.id, exc)
            item.status = "error"
            item.error_message = str(exc) or exc.__class__.__name__
        except Exception as exc:
            logger.exception("Could not send %s", item.id)
            item.status = "error"
            item.error_message = str(exc) or exc.__class__.__name__

        item.processed_at = _now_ms()
        self._persist()

    async def _drain_batch(self):
        self.state.draining = True
        try:
            # list.sort is stable, so equal priorities keep their enqueue order
            self.state.items.sort(key=lambda item: item.priority, reverse=True)
            batch = [item for item in self.state.items if item.status == "queued"][: self.batch_size]
            if not batch:
                return

            if self._client is not None:
                results = await asyncio.gather(
                    *(self.process_one(item, self._client) for item in batch), return_exceptions=True
                )
            else:
                async with httpx.AsyncClient(timeout=settings.ai_timeout_seconds) as client:
                    results = await asyncio.gather(
                        *(self.process_one(item, client) for item in batch), return_exceptions=True
                    )
            for item, result in zip(batch, results):
                if isinstance(result, Exception):
                    logger.error("Unexpected failure processing %s: %r", item.id, result)
        finally:
            self.state.draining = False

    async def drain(self):
        if self.state.draining:
            return
        await self._drain_batch()
        if self.queued_count:
            self._scheduler(self.drain_delay, self.drain)

    async def run_until_idle(self):
        while True:
            if self.state.draining:
                await asyncio.sleep(self.drain_delay)
                continue
            await self._drain_batch()
            if not self.queued_count:
                return
            await asyncio.sleep(self.drain_delay)
