# dashboard/config.py

from pydantic_settings import BaseSettings
from typing import Optional

from jobmatch.config import CompletionConfig


class Settings(BaseSettings):
    """Matching API configuration"""

    # App settings
    app_name: str = "Job Matching API"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Completion service
    ai_generate_url: Optional[str] = None
    ai_api_base: Optional[str] = None
    ai_model: str = "gpt-4o-mini"
    ranking_timeout: float = 60.0
    estimation_timeout: float = 45.0
    ai_max_retries: int = 2

    # Recommendations
    default_recommendation_limit: int = 10

    class Config:
        env_file = ".env"
        case_sensitive = False

    def completion_config(self) -> CompletionConfig:
        if self.ai_generate_url:
            base_url = self.ai_generate_url
        elif self.ai_api_base:
            base_url = f"{self.ai_api_base.rstrip('/')}/api/generate"
        else:
            base_url = CompletionConfig.base_url

        return CompletionConfig(
            base_url=base_url,
            model=self.ai_model,
            ranking_timeout=self.ranking_timeout,
            estimation_timeout=self.estimation_timeout,
            max_retries=self.ai_max_retries
        )


settings = Settings()
