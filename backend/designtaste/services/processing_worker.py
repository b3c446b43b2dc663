import asyncio
import logging
import uuid

from sqlalchemy.orm import Session, sessionmaker

from designtaste.models.analysis import ElementAnalysis
from designtaste.models.element import Element
from designtaste.models.inspiration import Inspiration
from designtaste.services.element_analysis import analyze_element, generate_search_keywords
from designtaste.services.inspiration_service import search_design_inspirations
from designtaste.utils.timestamps import utc_now

logger = logging.getLogger(__name__)


class ProcessingWorker:
    """
    Consumes element ids submitted by the ingestion endpoint and runs
    analysis plus inspiration search for each one.

    The HTTP response never waits on this work. Failures are written to the
    element row (status ``error`` + message) and logged, never re-raised and
    never retried. An element left in ``processing`` by a restart stays there.
    """

    def __init__(self, session_factory: sessionmaker, search=search_design_inspirations):
        self._session_factory = session_factory
        self._search = search
        self._queue: asyncio.Queue[str] = asyncio.Queue()
        self._task: asyncio.Task | None = None
        self.processed = 0
        self.failed = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    def submit(self, element_id: str):
        self._queue.put_nowait(element_id)

    def start(self):
        if not self.running:
            self._task = asyncio.create_task(self._run(), name="element-processing-worker")

    async def stop(self):
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

    async def join(self):
        await self._queue.join()

    async def _run(self):
        while True:
            element_id = await self._queue.get()
            try:
                await self.process(element_id)
            except Exception:
                logger.exception("Worker could not process element %s", element_id)
            finally:
                self._queue.task_done()

    async def process(self, element_id: str) -> str | None:
        return await asyncio.to_thread(self.process_sync, element_id)

    def process_sync(self, element_id: str) -> str | None:
        try:
            db = self._session_factory()
        except Exception:
            logger.exception("Could not open a session | element=%s", element_id)
            self.failed += 1
            return None
        try:
            try:
                self._analyze(db, element_id)
                self._find_inspirations(db, element_id)
                status = self._finish(db, element_id, "completed")
                self.processed += 1
            except Exception as exc:
                db.rollback()
                self.failed += 1
                logger.exception("Background processing failed | element=%s", element_id)
                status = self._finish(db, element_id, "error", str(exc) or exc.__class__.__name__)
            return status
        finally:
            db.close()

    def _load(self, db: Session, element_id: str) -> Element:
        element = db.query(Element).filter(Element.id == element_id).first()
        if element is None:
            raise LookupError(f"Element {element_id} not found")
        if not element.element_data:
            raise ValueError("Element data is empty")
        return element

    def _analyze(self, db: Session, element_id: str):
        element = self._load(db, element_id)
        result = analyze_element(element.element_data)
        logger.info("Detected component type %s | element=%s", result["component_type"], element_id)

        db.add(ElementAnalysis(id=str(uuid.uuid4()), element_id=element_id, created_at=utc_now(), **result))
        db.commit()

    def _find_inspirations(self, db: Session, element_id: str):
        element = self._load(db, element_id)
        analysis = element.analysis
        component_type = analysis.component_type
        user_prompt = element.element_data.get("userPrompt") or ""
        keywords = generate_search_keywords(component_type, user_prompt, analysis.style_characteristics)

        candidates = self._search(component_type, keywords)
        now = utc_now()
        for candidate in candidates:
            db.add(
                Inspiration(
                    id=str(uuid.uuid4()),
                    element_id=element_id,
                    title=candidate.title,
                    image_url=candidate.image_url,
                    source=candidate.source,
                    category=component_type,
                    tags=candidate.tags,
                    similarity_score=candidate.similarity_score,
                    description=candidate.description,
                    source_url=candidate.source_url,
                    created_at=now,
                )
            )
        db.commit()
        logger.info("Stored %d inspirations | element=%s", len(candidates), element_id)

    def _finish(self, db: Session, element_id: str, status: str, error_message: str | None = None) -> str | None:
        element = db.query(Element).filter(Element.id == element_id).first()
        if element is None:
            return None
        # Only a job still in flight may reach a terminal state.
        if element.status != "processing":
            logger.warning(
                "Not marking element %s as %s: status is already %s", element_id, status, element.status
            )
            return element.status
        element.status = status
        element.error_message = error_message
        element.processed_at = utc_now()
        db.commit()
        return status
