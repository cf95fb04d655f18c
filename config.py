"""
config.py — Konfiguracja aplikacji przez zmienne środowiskowe.
Wszystkie zmienne mają prefiks EXPR_WHIZZ_.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Parser
    max_nesting_depth: int = 150

    # Logging
    log_level: str = "INFO"

    # CLI
    repl_prompt: str = "whizz> "

    # App
    app_title: str = "ExpressionWhizz"
    app_version: str = "0.1.0"

    model_config = SettingsConfigDict(env_prefix="EXPR_WHIZZ_", env_file=".env", extra="ignore")
