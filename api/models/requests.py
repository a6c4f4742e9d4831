"""
Modelos de request/response para la API.

Estos modelos definen la estructura esperada de los requests HTTP y la forma
JSON de las respuestas de lint.
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class LintStatus(str, Enum):
    """Resultado global del lint."""

    OK = "ok"
    ERROR = "error"


class IssueSeverity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class LintRequest(BaseModel):
    """
    Body JSON de `POST /lint-bpmn`.

    Ambos campos son opcionales a nivel esquema: la validación de "al menos
    uno" la hace `ingest.extract_xml_text` para devolver 400 con un mensaje
    claro.
    """

    bpmnXml: Optional[str] = Field(
        default=None,
        description="Documento BPMN 2.0 XML como string",
    )
    bpmnGzipBase64: Optional[str] = Field(
        default=None,
        description="Documento BPMN comprimido con gzip y codificado en base64",
    )


class LintIssue(BaseModel):
    """Un issue normalizado."""

    rule: str = Field(..., description="Nombre de la regla")
    id: str = Field(..., description="Id del elemento BPMN, o 'root' si es a nivel documento")
    message: str = Field(..., description="Mensaje de la regla")
    severity: IssueSeverity = Field(..., description="Severidad: error|warning|info")


class RawFindingResponse(BaseModel):
    """Hallazgo tal como lo reportó el motor de reglas."""

    id: Optional[str] = Field(default=None, description="Id del elemento BPMN")
    message: str = Field(..., description="Mensaje de la regla")
    category: Optional[str] = Field(default=None, description="Categoría cruda: error|warn|info|rule-error")


class LintResponse(BaseModel):
    """
    Response del lint.

    `status` = "error" no es un error HTTP: el documento se procesó y tiene
    issues bloqueantes.
    """

    status: LintStatus = Field(..., description="Estado: ok|error")
    issues: List[LintIssue] = Field(default_factory=list, description="Issues deduplicados")
    rawReports: Optional[Dict[str, List[RawFindingResponse]]] = Field(
        default=None,
        description="Hallazgos crudos por regla (solo con raw=true)",
    )


class RulesResponse(BaseModel):
    """Configuración efectiva del motor de reglas."""

    extends: str = Field(..., description="Conjunto de reglas base")
    scope: str = Field(..., description="Pasadas de evaluación")
    rules: Dict[str, str] = Field(..., description="Regla → categoría (off si está deshabilitada)")
