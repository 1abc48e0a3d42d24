import importlib
import os


def get_settings_module() -> str:
    # Lấy môi trường từ biến APP_ENV, mặc định là 'development'
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "config.production"

    if env in {"test", "testing"}:
        return "config.testing"

    return "config.development"


def load_settings():
    """Import the settings module selected by APP_ENV."""
    return importlib.import_module(get_settings_module())
