"""
Dependencias de FastAPI para autenticación y acceso al core.

Este módulo proporciona dependencias reutilizables para:
- Verificar la API key (`Authorization: Bearer <ACTION_API_KEY>`)
- Obtener el `LintService` compartido (parser + linter + tabla de severidades)
"""

import logging
import secrets
from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header, HTTPException

from bpmn_lint_core.config import Settings, get_settings
from bpmn_lint_core.engine import LintService

logger = logging.getLogger(__name__)


async def require_api_key(
    authorization: Optional[str] = Header(None, alias="Authorization"),
    settings: Settings = Depends(get_settings),
) -> None:
    """
    Verifica el header Authorization contra `ACTION_API_KEY`.

    Si la variable no está configurada no se exige auth (útil para testing
    local).

    Raises:
        HTTPException: 401 si falta el header o no coincide
    """
    expected_key = settings.action_api_key
    if not expected_key:
        return

    expected_header = f"Bearer {expected_key}"
    if not authorization or not secrets.compare_digest(authorization, expected_header):
        logger.warning("Request rechazado: Authorization ausente o inválido")
        raise HTTPException(
            status_code=401,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )


@lru_cache(maxsize=4)
def build_lint_service(settings: Settings) -> LintService:
    """
    Construye los colaboradores una sola vez por configuración.

    Raises:
        LintConfigError: reglas, severidades o scope inválidos
    """
    return LintService.from_settings(settings)


def get_lint_service(settings: Settings = Depends(get_settings)) -> LintService:
    return build_lint_service(settings)
