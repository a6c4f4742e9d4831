# bpmn_lint_core/config.py
from dataclasses import dataclass
from functools import lru_cache
import os

from dotenv import load_dotenv

"""
bpmn_lint_core.config
=====================

Gestión centralizada de configuración del servicio de lint BPMN.

Este módulo define:
- La estructura de configuración (`Settings`)
- El mecanismo para cargar variables desde entorno (.env)
- Un acceso único y cacheado a la configuración (`get_settings`)

Objetivos de diseño
-------------------
1. **Fuente única de verdad**
   Toda la app obtiene configuración solo a través de `get_settings()`.

2. **Inmutabilidad**
   `Settings` es un dataclass congelado; se crea una sola vez y se reutiliza
   (cache LRU). La tabla de clasificación y el linter se construyen a partir
   de estos valores al arrancar.

3. **Separación de responsabilidades**
   - Este módulo NO interpreta reglas ni severidades
   - Solo expone valores crudos ya resueltos desde el entorno
   - El parseo de `SEVERITY_OVERRIDES`, `BPMNLINT_RULES`, etc. vive en
     `classification` y `lint_config`

4. **Facilidad de testing**
   En la API, `get_settings` se usa como dependencia de FastAPI, así que los
   tests pueden reemplazarla con `app.dependency_overrides`.

Convenciones
------------
- Las variables de entorno se cargan desde un archivo `.env` si existe.
- Los defaults están pensados para desarrollo local (sin auth, CORS abierto).
"""

# Cargar variables de entorno desde .env (si existe)
load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """
    Contenedor tipado de configuración global del servicio.

    Attributes
    ----------
    environment:
        Nombre del ambiente (local, staging, production). Solo informativo.
    log_level:
        Nivel de logging raíz (DEBUG, INFO, WARNING...).
    action_api_key:
        API key esperada en `Authorization: Bearer <key>`. Vacía = sin auth.
    cors_origins:
        Orígenes permitidos separados por coma. "*" permite cualquiera.
    max_bpmn_bytes:
        Tamaño máximo del documento (antes y después de descomprimir).
    lint_config_path:
        Ruta opcional a un archivo estilo `.bpmnlintrc` (JSON).
    lint_extends:
        Conjunto de reglas a usar cuando no hay archivo de configuración.
    lint_rules:
        Overrides por regla, formato "regla=valor,regla=valor".
    lint_scope:
        Pasadas de evaluación: definitions | root-elements | all.
    severity_overrides:
        Severidad forzada por regla, formato "regla=severidad,...".
    severity_default:
        Severidad cuando ni la regla ni la categoría resuelven.
    blocking_set:
        Severidades/categorías que vuelven `status` en "error".
    include_raw_reports:
        Si es True, todas las respuestas incluyen `rawReports`.
    """

    environment: str = "local"
    log_level: str = "INFO"

    # Auth / HTTP
    action_api_key: str = ""
    cors_origins: str = "*"
    max_bpmn_bytes: int = 5 * 1024 * 1024

    # Motor de reglas
    lint_config_path: str = ""
    lint_extends: str = "recommended"
    lint_rules: str = ""
    lint_scope: str = "definitions"

    # Clasificación de severidades
    severity_overrides: str = ""
    severity_default: str = "warning"
    blocking_set: str = "error,rule-error"

    include_raw_reports: bool = False

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """
    Devuelve una instancia única y cacheada de `Settings`.

    Variables de entorno utilizadas
    -------------------------------
    - ENVIRONMENT, LOG_LEVEL
    - ACTION_API_KEY, CORS_ORIGINS, MAX_BPMN_BYTES
    - BPMNLINT_CONFIG, BPMNLINT_EXTENDS, BPMNLINT_RULES, LINT_SCOPE
    - SEVERITY_OVERRIDES, SEVERITY_DEFAULT, BLOCKING_SET
    - INCLUDE_RAW_REPORTS

    Notas
    -----
    - Valores inválidos (severidades desconocidas, reglas inexistentes) NO se
      validan acá: fallan al construir la tabla de clasificación o el linter.
    """
    return Settings(
        environment=os.getenv("ENVIRONMENT", "local"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        action_api_key=os.getenv("ACTION_API_KEY", ""),
        cors_origins=os.getenv("CORS_ORIGINS", "*"),
        max_bpmn_bytes=int(os.getenv("MAX_BPMN_BYTES", str(5 * 1024 * 1024))),
        lint_config_path=os.getenv("BPMNLINT_CONFIG", ""),
        lint_extends=os.getenv("BPMNLINT_EXTENDS", "recommended"),
        lint_rules=os.getenv("BPMNLINT_RULES", ""),
        lint_scope=os.getenv("LINT_SCOPE", "definitions"),
        severity_overrides=os.getenv("SEVERITY_OVERRIDES", ""),
        severity_default=os.getenv("SEVERITY_DEFAULT", "warning"),
        blocking_set=os.getenv("BLOCKING_SET", "error,rule-error"),
        include_raw_reports=_env_bool("INCLUDE_RAW_REPORTS"),
    )
