from typing import Any

from designtaste.schemas.common import CamelModel


class ProcessElementRequest(CamelModel):
    # All optional so a missing field is reported as one 400, not a 422.
    id: str | None = None
    element_data: dict[str, Any] | None = None
    screenshot: str | None = None
    url: str | None = None


class ProcessElementResponse(CamelModel):
    success: bool = True
    element_id: str
    message: str


class ProcessingStep(CamelModel):
    label: str
    completed: bool


class ElementStatusResponse(CamelModel):
    id: str
    url: str
    element_data: dict[str, Any]
    status: str
    priority: int
    timestamp: int | None
    processed_at: int | None
    error_message: str | None
    progress: int
    current_step: str
    ai_provider: str
    steps: list[ProcessingStep]
    analysis: bool
    inspirations_count: int
    is_processing: bool


class ElementUpdate(CamelModel):
    status: str | None = None
    priority: int | None = None


class ElementRecord(CamelModel):
    id: str
    url: str
    element_data: dict[str, Any]
    screenshot: str | None = None
    status: str
    priority: int
    created_at: str
    processed_at: str | None
    error_message: str | None


class ElementUpdateResponse(CamelModel):
    success: bool = True
    element: ElementRecord


class AnalysisResponse(CamelModel):
    component_type: str
    design_issues: list[str]
    style_characteristics: list[str]
    recommendations: list[str]
    confidence_score: float
    created_at: str


class InspirationResponse(CamelModel):
    id: str
    title: str
    image_url: str
    source: str
    category: str | None
    tags: list[str]
    similarity_score: float
    description: str | None
    source_url: str | None
    created_at: str


class GeneratedCodeResponse(CamelModel):
    id: str
    framework: str
    code: str
    description: str | None
    improvements: list[str]
    timestamp: int | None


class ElementDetailsResponse(CamelModel):
    element: ElementRecord
    analysis: AnalysisResponse | None
    inspirations: list[InspirationResponse]
    generated_code: list[GeneratedCodeResponse]


class QueueItem(CamelModel):
    id: str
    url: str
    element_data: dict[str, Any]
    status: str
    priority: int
    timestamp: int | None
    processed_at: int | None
    error_message: str | None


class QueueStats(CamelModel):
    total: int = 0
    queued: int = 0
    processing: int = 0
    completed: int = 0
    error: int = 0


class QueueResponse(CamelModel):
    queue: list[QueueItem]
    stats: QueueStats


class GenerateElementCodeRequest(CamelModel):
    inspiration_ids: list[str] = []
    framework: str = "nextjs"
    style_preferences: list[str] = []


class GenerateElementCodeResponse(CamelModel):
    success: bool = True
    generated_code: GeneratedCodeResponse
