from typing import Any

from designtaste.schemas.common import CamelModel


class QuickFixRequest(CamelModel):
    element_data: dict[str, Any] | None = None
    prompt: str | None = None


class QuickFixResponse(CamelModel):
    success: bool = True
    suggestion: str
    type: str = "quick_fix"
