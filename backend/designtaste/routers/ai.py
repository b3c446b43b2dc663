import logging

from fastapi import APIRouter, Depends, HTTPException

from designtaste.dependencies import EXTENSION_CORS_HEADERS, allow_any_origin, preflight_response
from designtaste.schemas.ai import (
    AnalyzeElementRequest,
    AnalyzeElementResponse,
    GenerateCodeRequest,
    GenerateCodeResponse,
    GeneratePromptRequest,
    GeneratePromptResponse,
    GenerateVariationsRequest,
    GenerateVariationsResponse,
    ImproveCodeRequest,
    ImproveCodeResponse,
    ProvidersResponse,
)
from designtaste.services import ai_service
from designtaste.services.ai_providers import get_available_providers, get_default_provider, get_recommendation

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai", tags=["ai"], dependencies=[Depends(allow_any_origin)])


def _bad_request(detail: str) -> HTTPException:
    return HTTPException(status_code=400, detail=detail, headers=EXTENSION_CORS_HEADERS)


@router.options("/{path:path}", include_in_schema=False)
async def ai_preflight():
    return preflight_response()


@router.post("/generate-code", response_model=GenerateCodeResponse)
async def generate_code(req: GenerateCodeRequest):
    if not req.image_url or not req.component_type:
        raise _bad_request("Missing required fields: imageUrl and componentType")

    logger.info("Generating code from inspiration | type=%s", req.component_type)
    code = await ai_service.generate_code_from_inspiration(
        req.image_url, req.component_type, req.user_prompt, req.original_element_data
    )
    return GenerateCodeResponse(code=code)


@router.post("/generate-prompt", response_model=GeneratePromptResponse)
async def generate_prompt(req: GeneratePromptRequest):
    if not req.image_url or not req.component_type:
        raise _bad_request("Missing required fields: imageUrl and componentType")

    prompt = await ai_service.generate_prompt_from_inspiration(req.image_url, req.component_type)
    return GeneratePromptResponse(prompt=prompt)


@router.post("/generate-variations", response_model=GenerateVariationsResponse)
async def generate_variations(req: GenerateVariationsRequest):
    if not req.image_url:
        raise _bad_request("Image URL is required")

    variations, fallback = await ai_service.generate_variations(req.image_url, req.component_type)
    return GenerateVariationsResponse(variations=variations, fallback=fallback)


@router.post("/analyze-element", response_model=AnalyzeElementResponse)
async def analyze_element(req: AnalyzeElementRequest):
    if not req.image_url:
        raise _bad_request("Image URL is required")

    result = await ai_service.analyze_element_image(req.image_url, req.element_data)
    return AnalyzeElementResponse(**result)


@router.post("/improve-code", response_model=ImproveCodeResponse)
async def improve_code(req: ImproveCodeRequest):
    if not req.code or not req.improvement_request:
        raise _bad_request("Missing required fields: code and improvementRequest")

    code = await ai_service.improve_existing_code(
        req.code, req.improvement_request, req.component_type or "component"
    )
    return ImproveCodeResponse(code=code)


@router.get("/providers", response_model=ProvidersResponse)
async def list_providers():
    providers = get_available_providers()
    return ProvidersResponse(
        current_provider=get_default_provider().value,
        providers=providers,
        recommendation=get_recommendation(providers),
    )
