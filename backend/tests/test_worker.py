import asyncio

from designtaste.models import ElementAnalysis, Inspiration
from designtaste.models.element import Element
from designtaste.services.inspiration_service import InspirationCandidate
from designtaste.services.processing_worker import ProcessingWorker
from designtaste.utils.timestamps import utc_now


def _add_element(session_factory, element_data, element_id="element_1", status="processing"):
    db = session_factory()
    db.add(
        Element(
            id=element_id,
            source_url="https://example.com",
            element_data=element_data,
            screenshot_url="data:image/png;base64,AAAA",
            status=status,
            priority=1,
            created_at=utc_now(),
        )
    )
    db.commit()
    db.close()


def _get(session_factory, element_id="element_1"):
    db = session_factory()
    element = db.get(Element, element_id)
    db.close()
    return element


def _two_results(component_type, keywords):
    return [
        InspirationCandidate("A", "https://img/a.png", "Test", [component_type], 0.9),
        InspirationCandidate("B", "https://img/b.png", "Test", [component_type], 0.4),
    ]


class TestProcessSync:
    def test_success_stores_analysis_and_inspirations(self, test_db, element_data):
        _add_element(test_db, element_data)
        worker = ProcessingWorker(test_db, search=_two_results)

        assert worker.process_sync("element_1") == "completed"

        element = _get(test_db)
        assert element.status == "completed"
        assert element.processed_at is not None
        assert element.error_message is None

        db = test_db()
        analysis = db.query(ElementAnalysis).one()
        assert analysis.component_type == "button"
        assert [i.title for i in db.query(Inspiration).order_by(Inspiration.title)] == ["A", "B"]
        assert {i.category for i in db.query(Inspiration)} == {"button"}
        db.close()
        assert worker.processed == 1
        assert worker.failed == 0

    def test_user_prompt_feeds_keywords(self, test_db, element_data):
        seen = {}

        def search(component_type, keywords):
            seen["keywords"] = keywords
            return []

        _add_element(test_db, {**element_data, "userPrompt": "Make it feel playful"})
        ProcessingWorker(test_db, search=search).process_sync("element_1")
        assert "playful" in seen["keywords"]

    def test_empty_element_data_marks_error(self, test_db):
        _add_element(test_db, {})
        worker = ProcessingWorker(test_db, search=_two_results)

        assert worker.process_sync("element_1") == "error"

        element = _get(test_db)
        assert element.status == "error"
        assert element.error_message == "Element data is empty"
        assert worker.failed == 1

    def test_search_failure_marks_error_and_keeps_analysis(self, test_db, element_data):
        def broken(component_type, keywords):
            raise RuntimeError("search backend down")

        _add_element(test_db, element_data)
        assert ProcessingWorker(test_db, search=broken).process_sync("element_1") == "error"

        assert _get(test_db).error_message == "search backend down"
        db = test_db()
        assert db.query(ElementAnalysis).count() == 1
        assert db.query(Inspiration).count() == 0
        db.close()

    def test_does_not_overwrite_non_processing_status(self, test_db, element_data):
        _add_element(test_db, element_data, status="queued")
        worker = ProcessingWorker(test_db, search=_two_results)

        assert worker.process_sync("element_1") == "queued"
        element = _get(test_db)
        assert element.status == "queued"
        assert element.processed_at is None

    def test_missing_element(self, test_db):
        worker = ProcessingWorker(test_db)
        assert worker.process_sync("nope") is None
        assert worker.failed == 1


def test_submit_and_join(test_db, element_data):
    _add_element(test_db, element_data, element_id="a")
    _add_element(test_db, element_data, element_id="b")

    async def run():
        worker = ProcessingWorker(test_db, search=_two_results)
        worker.start()
        assert worker.running
        worker.submit("a")
        worker.submit("b")
        await worker.join()
        await worker.stop()
        assert not worker.running
        return worker

    worker = asyncio.run(run())
    assert worker.processed == 2
    assert _get(test_db, "a").status == "completed"
    assert _get(test_db, "b").status == "completed"


def test_stop_without_start_is_noop():
    async def run():
        worker = ProcessingWorker(None)
        await worker.stop()
        return worker.running

    assert asyncio.run(run()) is False


def test_worker_survives_session_failure(test_db, element_data):
    _add_element(test_db, element_data, element_id="a")
    _add_element(test_db, element_data, element_id="b")
    calls = []

    def flaky_sessions():
        calls.append(1)
        if len(calls) == 1:
            raise RuntimeError("database is locked")
        return test_db()

    async def run():
        worker = ProcessingWorker(flaky_sessions, search=_two_results)
        worker.start()
        worker.submit("a")
        worker.submit("b")
        await asyncio.wait_for(worker.join(), timeout=5)
        assert worker.running
        await worker.stop()
        return worker

    worker = asyncio.run(run())
    assert worker.failed == 1
    assert worker.processed == 1
    assert _get(test_db, "a").status == "processing"
    assert _get(test_db, "b").status == "completed"


def test_worker_survives_error_write_failure(test_db, element_data, monkeypatch):
    _add_element(test_db, {}, element_id="a")
    _add_element(test_db, element_data, element_id="b")
    original_finish = ProcessingWorker._finish

    def finish(self, db, element_id, status, error_message=None):
        if status == "error":
            raise RuntimeError("disk I/O error")
        return original_finish(self, db, element_id, status, error_message)

    monkeypatch.setattr(ProcessingWorker, "_finish", finish)

    async def run():
        worker = ProcessingWorker(test_db, search=_two_results)
        worker.start()
        worker.submit("a")
        worker.submit("b")
        await asyncio.wait_for(worker.join(), timeout=5)
        assert worker.running
        await worker.stop()
        return worker

    worker = asyncio.run(run())
    assert worker.failed == 1
    assert _get(test_db, "b").status == "completed"
