from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "Prompt Optimizer"
    app_version: str = "0.1.0"

    # Semantic service
    semantic_backend: str = "none"  # none | sentence_transformers | openai | openai_compatible | ollama
    semantic_model: str = "sentence-transformers/all-MiniLM-L6-v2"
    semantic_api_key: str = ""
    semantic_base_url: str = ""  # Custom base URL for openai_compatible backends
    semantic_init_timeout: float = 2.0
    semantic_query_timeout: float = 1.0
    semantic_confidence_threshold: float = 0.6
    semantic_warmup_timeout: float = 30.0  # model load at startup

    # Ranking
    ranking_framework_timeout: float = 1.0
    ranking_overall_timeout: float = 8.0

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False

    # Requests
    max_prompt_chars: int = 200_000

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
