from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Application
    app_name: str = "Misconception Mentor"
    debug: bool = False

    # Deterministic demo responses instead of calling the model
    demo_mode: bool = False

    # Supabase (optional: attempt history + telemetry)
    supabase_url: str = ""
    supabase_service_key: str = ""

    # OpenAI
    openai_api_key: str = ""
    openai_model_evaluate: str = "gpt-4o-mini"

    # Gemini
    gemini_api_key: str = ""
    llm_provider: str = "openai"

    # CORS
    frontend_url: str = "http://localhost:3000"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    return Settings()
