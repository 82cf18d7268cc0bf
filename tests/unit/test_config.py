"""
Unit tests for Settings.
"""
import os
from unittest.mock import patch

from user_service.core.config import Settings


def test_defaults():
    with patch.dict(os.environ, {}, clear=True):
        settings = Settings()
    assert settings.mongo_uri == "mongodb://localhost:27017"
    assert settings.port == 5000
    assert settings.environment == "development"
    assert settings.users_route_prefix == "/routes/users"
    assert settings.is_production is False
    assert settings.allowed_origins == [
        "http://localhost:5173",
        "http://localhost:3000",
        "http://localhost:4000",
    ]


def test_allowed_origins_extended_without_duplicates():
    env = {
        "FRONTEND_URL": "https://app.example.com",
        "CORS_ALLOWED_ORIGINS": "https://admin.example.com, http://localhost:3000,",
    }
    with patch.dict(os.environ, env, clear=True):
        settings = Settings()
    assert settings.allowed_origins == [
        "http://localhost:5173",
        "http://localhost:3000",
        "http://localhost:4000",
        "https://app.example.com",
        "https://admin.example.com",
    ]


def test_production_flag_case_insensitive():
    with patch.dict(os.environ, {"ENVIRONMENT": "Production", "PORT": "8080"}, clear=True):
        settings = Settings()
    assert settings.is_production is True
    assert settings.port == 8080
