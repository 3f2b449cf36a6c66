"""Configuración del Core.

- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- La credencial (`api_key`) se lee una sola vez aquí y se inyecta al transporte;
  el motor nunca la busca en un global.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.language import Language

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "astro-explorer"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "astro-explorer"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "astro-explorer"
    return Path.home() / ".config" / "astro-explorer"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], *, env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# astro-explorer user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Orden de fuentes: variables de entorno, `.env` del proyecto y luego el
    `.env` global del usuario.
    """

    model_config = SettingsConfigDict(
        env_prefix="ASTRO_EXPLORER_",
        extra="ignore",
        case_sensitive=False,
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
        frozen=True,
    )

    api_key: str = Field(
        default="DEMO_KEY",
        min_length=1,
        description="Credencial estática enviada como `api_key` en cada llamada.",
    )
    base_url: str = Field(
        default="https://api.nasa.gov",
        min_length=8,
        description="Raíz del servicio remoto.",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="astro-explorer/0.1",
        min_length=1,
        description="User-Agent para las peticiones.",
    )

    rover_page_size: int = Field(
        default=25,
        ge=1,
        le=1000,
        description="Tamaño fijo de página del recurso de fotos de rovers.",
    )
    neo_feed_max_days: int = Field(
        default=7,
        ge=1,
        description="Rango máximo (días) aceptado por el feed de NEOs.",
    )

    log_level: LogLevel = Field(
        default="WARNING",
        description="Nivel de logging para la CLI.",
    )
    default_language: Language = Field(
        default=Language.default(),
        description="Idioma por defecto para etiquetas (en/pt).",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value
