from fastapi import APIRouter, HTTPException

from designtaste.schemas.quick_fix import QuickFixRequest, QuickFixResponse
from designtaste.services.quick_fix_service import generate_quick_fix_suggestion

router = APIRouter(tags=["quick-fix"])


@router.post("/quick-fix", response_model=QuickFixResponse)
async def quick_fix(req: QuickFixRequest):
    if not req.element_data or not req.prompt:
        raise HTTPException(status_code=400, detail="Missing element data or prompt")
    return QuickFixResponse(suggestion=generate_quick_fix_suggestion(req.element_data, req.prompt))
