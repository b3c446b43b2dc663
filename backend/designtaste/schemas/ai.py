from typing import Any

from designtaste.schemas.common import CamelModel


class ComponentCode(CamelModel):
    tailwind_code: str
    react_code: str
    css_code: str
    description: str
    features: list[str] = []
    accessibility: list[str] = []
    responsive: bool = True
    animations: list[str] = []


class DesignVariation(CamelModel):
    title: str
    description: str
    changes: list[str] = []
    design_rationale: str = ""
    image_url: str | None = None


class GenerateCodeRequest(CamelModel):
    image_url: str | None = None
    component_type: str | None = None
    user_prompt: str | None = None
    original_element_data: dict[str, Any] | None = None


class GenerateCodeResponse(CamelModel):
    success: bool = True
    code: ComponentCode


class GeneratePromptRequest(CamelModel):
    image_url: str | None = None
    component_type: str | None = None


class GeneratePromptResponse(CamelModel):
    success: bool = True
    prompt: str


class GenerateVariationsRequest(CamelModel):
    image_url: str | None = None
    component_type: str | None = None
    original_element_data: dict[str, Any] | None = None


class GenerateVariationsResponse(CamelModel):
    success: bool = True
    variations: list[DesignVariation]
    fallback: bool = False


class AnalyzeElementRequest(CamelModel):
    image_url: str | None = None
    element_data: dict[str, Any] | None = None


class AnalyzeElementResponse(CamelModel):
    success: bool = True
    suggested_prompt: str
    component_type: str
    fallback: bool = False


class ImproveCodeRequest(CamelModel):
    code: str | None = None
    improvement_request: str | None = None
    component_type: str | None = None


class ImproveCodeResponse(CamelModel):
    success: bool = True
    code: str


class ProviderStatus(CamelModel):
    id: str
    name: str
    supports_vision: bool
    supports_json_mode: bool
    has_api_key: bool


class ProvidersResponse(CamelModel):
    success: bool = True
    current_provider: str
    providers: list[ProviderStatus]
    recommendation: str
