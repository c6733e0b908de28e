"""Application settings and configuration."""

from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional
import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Project root directory
PROJECT_ROOT = Path(__file__).parent.parent


def _env_flag(name: str, default: str = "false") -> bool:
    """Read a boolean flag from the environment."""
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class BackendConfig:
    """Hosted backend (Supabase REST) configuration settings."""

    url: Optional[str] = field(default_factory=lambda: os.getenv("SUPABASE_URL"))
    anon_key: Optional[str] = field(default_factory=lambda: os.getenv("SUPABASE_ANON_KEY"))
    timeout: int = field(
        default_factory=lambda: int(os.getenv("BACKEND_TIMEOUT_SECONDS", "30"))
    )
    use_demo: bool = field(default_factory=lambda: _env_flag("USE_DEMO_BACKEND"))

    @property
    def rest_url(self) -> Optional[str]:
        """Base URL of the PostgREST endpoint."""
        if not self.url:
            return None
        return f"{self.url.rstrip('/')}/rest/v1"

    @property
    def is_configured(self) -> bool:
        """True when both URL and key are available."""
        return bool(self.url and self.anon_key)


@dataclass
class AppConfig:
    """Application configuration settings."""

    name: str = field(default_factory=lambda: os.getenv("APP_NAME", "FinanceiroLB"))
    version: str = field(default_factory=lambda: os.getenv("APP_VERSION", "1.0.0"))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_file: Optional[Path] = field(
        default_factory=lambda: Path(os.environ["LOG_FILE"]) if os.getenv("LOG_FILE") else None
    )
    entity_load_limit: int = field(
        default_factory=lambda: int(os.getenv("ENTITY_LOAD_LIMIT", "500"))
    )
    search_debounce: float = field(
        default_factory=lambda: float(os.getenv("SEARCH_DEBOUNCE_SECONDS", "0.3"))
    )
    search_placeholder: str = "Buscar..."
    empty_message: str = "Nenhum registro encontrado"


@dataclass
class Config:
    """Main configuration container."""

    backend: BackendConfig = field(default_factory=BackendConfig)
    app: AppConfig = field(default_factory=AppConfig)


# Global config instance
config = Config()
