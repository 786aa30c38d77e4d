import os


def get_settings_module() -> str:
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "gradewise.config.production"

    if env in {"test", "testing"}:
        return "gradewise.config.testing"

    return "gradewise.config.development"
