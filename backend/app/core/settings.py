# backend/app/core/settings.py

import os

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # URL базы данных для SQLAlchemy
    db_url: str = "sqlite:///./cinelog.db"

    # Флаг для включения debug-режима FastAPI (пока просто bool)
    app_debug: bool = True

    # Простое обозначение окружения
    environment: str = "dev"

    # Флаг тестового режима (можно переопределить переменной окружения TESTING=1)
    testing: bool = False

    # Подпись JWT-токенов
    secret_key: str = "dev-secret-key-change-me"
    access_token_expire_minutes: int = 30

    # Внешний провайдер метаданных (TMDB)
    tmdb_api_key: str = ""
    tmdb_base_url: str = "https://api.themoviedb.org/3"
    tmdb_language: str = "es-ES"
    tmdb_timeout_seconds: float = 10.0

    # Разрешенные origins для CORS, через запятую
    allowed_origins: str = "http://localhost:3000,http://127.0.0.1:3000"

    # Настройки pydantic-settings (v2)
    model_config = SettingsConfigDict(
        env_file=".env",              # читаем переменные из .env
        env_file_encoding="utf-8",
        extra="ignore",               # игнорируем любые лишние переменные
    )


settings = Settings()

# Авто-определение тестового режима, если запущен pytest
if os.getenv("PYTEST_CURRENT_TEST"):
    settings.testing = True
