import json
import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import func
from sqlalchemy.orm import Session

from designtaste.config import settings
from designtaste.database import get_db
from designtaste.dependencies import EXTENSION_CORS_HEADERS, allow_any_origin, get_worker, preflight_response
from designtaste.models.analysis import ElementAnalysis
from designtaste.models.element import ELEMENT_STATUSES, Element
from designtaste.models.generated_code import GeneratedCode
from designtaste.models.inspiration import Inspiration
from designtaste.schemas.common import SuccessResponse
from designtaste.schemas.element import (
    AnalysisResponse,
    ElementDetailsResponse,
    ElementRecord,
    ElementStatusResponse,
    ElementUpdate,
    ElementUpdateResponse,
    GenerateElementCodeRequest,
    GenerateElementCodeResponse,
    GeneratedCodeResponse,
    InspirationResponse,
    ProcessElementRequest,
    ProcessElementResponse,
    ProcessingStep,
    QueueItem,
    QueueResponse,
    QueueStats,
)
from designtaste.services.ai_service import generate_element_code
from designtaste.services.processing_worker import ProcessingWorker
from designtaste.services.progress import calculate_progress, current_step, processing_steps, provider_for_step
from designtaste.utils.timestamps import to_epoch_ms, utc_now

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/elements", tags=["elements"])


def _get_element(db: Session, element_id: str, cors: bool = False) -> Element:
    element = db.query(Element).filter(Element.id == element_id).first()
    if not element:
        raise HTTPException(
            status_code=404, detail="Element not found", headers=EXTENSION_CORS_HEADERS if cors else None
        )
    return element


def _element_to_record(element: Element) -> ElementRecord:
    return ElementRecord(
        id=element.id,
        url=element.source_url,
        element_data=element.element_data,
        screenshot=element.screenshot_url,
        status=element.status,
        priority=element.priority,
        created_at=element.created_at,
        processed_at=element.processed_at,
        error_message=element.error_message,
    )


def _analysis_to_response(analysis: ElementAnalysis) -> AnalysisResponse:
    return AnalysisResponse(
        component_type=analysis.component_type,
        design_issues=analysis.design_issues,
        style_characteristics=analysis.style_characteristics,
        recommendations=analysis.recommendations,
        confidence_score=analysis.confidence_score,
        created_at=analysis.created_at,
    )


def _inspiration_to_response(insp: Inspiration) -> InspirationResponse:
    return InspirationResponse(
        id=insp.id,
        title=insp.title,
        image_url=insp.image_url,
        source=insp.source,
        category=insp.category,
        tags=insp.tags,
        similarity_score=insp.similarity_score,
        description=insp.description,
        source_url=insp.source_url,
        created_at=insp.created_at,
    )


def _code_to_response(code: GeneratedCode) -> GeneratedCodeResponse:
    return GeneratedCodeResponse(
        id=code.id,
        framework=code.framework,
        code=code.code,
        description=code.description,
        improvements=code.improvements,
        timestamp=to_epoch_ms(code.created_at),
    )


@router.options("/process", include_in_schema=False)
@router.options("/queue", include_in_schema=False)
@router.options("/{element_id}/details", include_in_schema=False)
@router.options("/{element_id}/generate-code", include_in_schema=False)
async def elements_preflight():
    return preflight_response()


@router.post("/process", response_model=ProcessElementResponse, dependencies=[Depends(allow_any_origin)])
async def process_element(
    req: ProcessElementRequest,
    db: Session = Depends(get_db),
    worker: ProcessingWorker = Depends(get_worker),
):
    if not (req.id and req.element_data is not None and req.screenshot and req.url):
        raise HTTPException(status_code=400, detail="Missing required fields", headers=EXTENSION_CORS_HEADERS)

    if len(req.screenshot) > settings.max_screenshot_chars:
        raise HTTPException(status_code=413, detail="Screenshot too large", headers=EXTENSION_CORS_HEADERS)
    if len(json.dumps(req.element_data)) > settings.max_element_data_chars:
        raise HTTPException(status_code=413, detail="Element data too large", headers=EXTENSION_CORS_HEADERS)

    if db.query(Element.id).filter(Element.id == req.id).first():
        raise HTTPException(status_code=409, detail="Element already exists", headers=EXTENSION_CORS_HEADERS)

    logger.info("Processing element %s from %s | fields=%s", req.id, req.url, sorted(req.element_data))
    db.add(
        Element(
            id=req.id,
            source_url=req.url,
            element_data=req.element_data,
            screenshot_url=req.screenshot,
            status="processing",
            priority=1,
            created_at=utc_now(),
        )
    )
    db.commit()

    worker.submit(req.id)
    return ProcessElementResponse(element_id=req.id, message="Element queued for processing")


@router.get("/queue", response_model=QueueResponse, dependencies=[Depends(allow_any_origin)])
async def list_queue(db: Session = Depends(get_db)):
    elements = db.query(Element).order_by(Element.created_at.desc()).all()
    stats = QueueStats(total=len(elements))
    for element in elements:
        setattr(stats, element.status, getattr(stats, element.status) + 1)

    queue = [
        QueueItem(
            id=e.id,
            url=e.source_url,
            element_data=e.element_data,
            status=e.status,
            priority=e.priority,
            timestamp=to_epoch_ms(e.created_at),
            processed_at=to_epoch_ms(e.processed_at),
            error_message=e.error_message,
        )
        for e in elements
    ]
    return QueueResponse(queue=queue, stats=stats)


@router.delete("/queue", response_model=SuccessResponse, dependencies=[Depends(allow_any_origin)])
async def clear_queue(db: Session = Depends(get_db)):
    # Child rows go with the ON DELETE CASCADE foreign keys.
    removed = db.query(Element).delete(synchronize_session=False)
    db.commit()
    logger.info("Cleared %d elements from the queue", removed)
    return SuccessResponse(message="Queue cleared successfully")


@router.get("/{element_id}/status", response_model=ElementStatusResponse)
async def get_element_status(element_id: str, db: Session = Depends(get_db)):
    element = _get_element(db, element_id)
    has_analysis = (
        db.query(ElementAnalysis.id).filter(ElementAnalysis.element_id == element_id).first() is not None
    )
    inspirations_count = (
        db.query(func.count(Inspiration.id)).filter(Inspiration.element_id == element_id).scalar()
    )
    status = element.status

    return ElementStatusResponse(
        id=element.id,
        url=element.source_url,
        element_data=element.element_data,
        status=status,
        priority=element.priority,
        timestamp=to_epoch_ms(element.created_at),
        processed_at=to_epoch_ms(element.processed_at),
        error_message=element.error_message,
        progress=calculate_progress(status, has_analysis, inspirations_count),
        current_step=current_step(status, has_analysis, inspirations_count),
        ai_provider=provider_for_step(has_analysis, inspirations_count),
        steps=[ProcessingStep(**s) for s in processing_steps(status, has_analysis, inspirations_count)],
        analysis=has_analysis,
        inspirations_count=inspirations_count,
        is_processing=status == "processing",
    )


@router.patch("/{element_id}/status", response_model=ElementUpdateResponse)
async def update_element_status(element_id: str, req: ElementUpdate, db: Session = Depends(get_db)):
    if req.status is None and req.priority is None:
        raise HTTPException(status_code=400, detail="No valid fields to update")
    if req.status is not None and req.status not in ELEMENT_STATUSES:
        raise HTTPException(status_code=400, detail="Invalid status")

    element = _get_element(db, element_id)
    if req.status is not None:
        element.status = req.status
    if req.priority is not None:
        element.priority = req.priority
    db.commit()
    db.refresh(element)
    return ElementUpdateResponse(element=_element_to_record(element))


@router.delete("/{element_id}/status", response_model=SuccessResponse)
async def delete_element(element_id: str, db: Session = Depends(get_db)):
    element = _get_element(db, element_id)
    db.delete(element)
    db.commit()
    return SuccessResponse(message="Element deleted successfully")


@router.get(
    "/{element_id}/details", response_model=ElementDetailsResponse, dependencies=[Depends(allow_any_origin)]
)
async def get_element_details(element_id: str, db: Session = Depends(get_db)):
    element = _get_element(db, element_id, cors=True)
    inspirations = (
        db.query(Inspiration)
        .filter(Inspiration.element_id == element_id)
        .order_by(Inspiration.similarity_score.desc())
        .all()
    )
    generated = (
        db.query(GeneratedCode)
        .filter(GeneratedCode.element_id == element_id)
        .order_by(GeneratedCode.created_at.desc())
        .all()
    )
    return ElementDetailsResponse(
        element=_element_to_record(element),
        analysis=_analysis_to_response(element.analysis) if element.analysis else None,
        inspirations=[_inspiration_to_response(i) for i in inspirations],
        generated_code=[_code_to_response(c) for c in generated],
    )


@router.post(
    "/{element_id}/generate-code",
    response_model=GenerateElementCodeResponse,
    dependencies=[Depends(allow_any_origin)],
)
async def generate_code_for_element(
    element_id: str, req: GenerateElementCodeRequest, db: Session = Depends(get_db)
):
    element = _get_element(db, element_id, cors=True)
    analysis = element.analysis
    analysis_data = (
        {
            "component_type": analysis.component_type,
            "design_issues": analysis.design_issues,
            "recommendations": analysis.recommendations,
        }
        if analysis
        else None
    )

    selected = []
    if req.inspiration_ids:
        selected = [
            {"title": i.title, "tags": i.tags}
            for i in db.query(Inspiration)
            .filter(Inspiration.element_id == element_id, Inspiration.id.in_(req.inspiration_ids))
            .all()
        ]

    result = await generate_element_code(
        element.element_data, analysis_data, selected, req.framework, req.style_preferences
    )

    record = GeneratedCode(
        id=str(uuid.uuid4()),
        element_id=element_id,
        framework=req.framework,
        code=result["code"],
        description=result["description"],
        improvements=result["improvements"],
        created_at=utc_now(),
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    return GenerateElementCodeResponse(generated_code=_code_to_response(record))
