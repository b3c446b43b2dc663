from pathlib import Path
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    data_dir: Path = Path.home() / "DesignTaste"
    api_prefix: str = "/api"
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "info"
    # Screenshots arrive as data URIs; cap them before they hit the database.
    max_screenshot_chars: int = 10 * 1024 * 1024
    max_element_data_chars: int = 500_000

    openai_api_key: str = ""
    anthropic_api_key: str = ""
    mistral_api_key: str = ""
    default_ai_provider: str = "openai"
    mistral_base_url: str = "https://api.mistral.ai/v1"
    ai_timeout_seconds: float = 60.0

    # Where the capture client posts queued elements.
    backend_url: str = "http://127.0.0.1:8000"

    @property
    def db_path(self) -> Path:
        return self.data_dir / "designtaste.db"

    @property
    def queue_path(self) -> Path:
        return self.data_dir / "queue.json"

    model_config = {"env_prefix": "DESIGNTASTE_"}


settings = Settings()
