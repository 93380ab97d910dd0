from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Server
    host: str = "127.0.0.1"
    port: int = 8001

    # Mapping tables (one JSON document per language)
    synonyms_dir: str = "./synonyms"        # <dir>/<language>.json
    icon_mapping_dir: str = "./data"        # <dir>/icon_ids_<language>.json
    default_language: str = "english"

    # Suggestions shown for unmatched titles
    suggestion_limit: int = 3

    # Semantic fallback (Claude API)
    anthropic_api_key: str = ""
    semantic_model: str = "claude-haiku-4-5-20251001"
    semantic_delay: float = 0.2             # seconds after each fallback call
    semantic_max_keywords: int = 100        # keywords listed in the prompt

    @property
    def semantic_enabled(self) -> bool:
        return bool(self.anthropic_api_key)

    # Auth
    api_key: str = ""  # Set to enable API key auth; empty = no auth

    # Log
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
