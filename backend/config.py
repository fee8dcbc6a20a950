from pydantic_settings import BaseSettings

from utils.units import UnitSystem, UnitValueError, parse_unit_system


class Settings(BaseSettings):
    ENVIRONMENT: str = "development"  # development | test | staging | production
    APP_NAME: str = "DiveIQ"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: list[str] = [
        "http://localhost:3000",
        "http://localhost:8001",
        "https://localhost:3000",
    ]
    # Toggle shown to guests before they pick one; signed-in users fall back to
    # the imperial DEFAULT_UNIT_PREFERENCES instead.
    GUEST_UNIT_SYSTEM: str = "metric"  # metric | imperial
    SECURITY_HEADERS_ENABLED: bool = True
    SECURITY_CSP: str = (
        "default-src 'self'; "
        "img-src 'self' data: blob:; "
        "style-src 'self' 'unsafe-inline'; "
        "script-src 'self'; "
        "connect-src 'self' https:; "
        "frame-ancestors 'none'; "
        "base-uri 'self'; "
        "form-action 'self';"
    )

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def is_production_like(self) -> bool:
        return (self.ENVIRONMENT or "").strip().lower() in {"production", "prod", "staging"}

    @property
    def guest_unit_system(self) -> UnitSystem:
        return parse_unit_system(self.GUEST_UNIT_SYSTEM)

    def validate_unit_configuration(self) -> None:
        errors: list[str] = []
        try:
            parse_unit_system(self.GUEST_UNIT_SYSTEM)
        except UnitValueError as exc:
            errors.append(f"GUEST_UNIT_SYSTEM: {exc}")
        if (self.LOG_LEVEL or "").strip().upper() not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            errors.append(f"LOG_LEVEL must be a standard logging level, got {self.LOG_LEVEL!r}")
        if errors:
            joined = "; ".join(errors)
            raise RuntimeError(f"Invalid unit configuration: {joined}")


settings = Settings()
