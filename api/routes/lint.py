"""
Endpoints de lint BPMN.

Este router maneja:
- POST /lint-bpmn: lintear un documento enviado en JSON (plano o gzip+base64)
- POST /lint-bpmn/upload: lintear un archivo subido (multipart/form-data)
- GET /lint-bpmn/rules: configuración efectiva del motor de reglas

Todos los endpoints exigen API key si `ACTION_API_KEY` está configurada.
"""

import logging

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile

from bpmn_lint_core.config import Settings, get_settings
from bpmn_lint_core.engine import LintService
from bpmn_lint_core.errors import BpmnInputError
from bpmn_lint_core.ingest import decode_document_bytes, extract_xml_text

from ..dependencies import get_lint_service, require_api_key
from ..models.requests import LintRequest, LintResponse, RulesResponse

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/lint-bpmn",
    tags=["lint"],
    dependencies=[Depends(require_api_key)],
)


def _input_error(e: BpmnInputError) -> HTTPException:
    logger.warning(f"Documento rechazado ({type(e).__name__}): {e}")
    return HTTPException(status_code=e.status_code, detail=str(e))


def _run_lint(xml_text: str, service: LintService, include_raw: bool) -> dict:
    """
    Corre el pipeline y arma el payload.

    Un `status` "error" es una respuesta 200: el documento se procesó.
    """
    try:
        result = service.lint(xml_text)
    except BpmnInputError as e:
        raise _input_error(e)
    except Exception as e:
        logger.exception(f"Lint error: {e}")
        raise HTTPException(status_code=500, detail=f"Linting failed: {e}")

    payload = result["outcome"].to_dict()
    if include_raw:
        payload["rawReports"] = {
            rule: [finding.to_dict() for finding in findings]
            for rule, findings in result["raw_reports"].items()
        }
    return payload


@router.post("", response_model=LintResponse, response_model_exclude_none=True)
def lint_bpmn(
    body: LintRequest,
    raw: bool = Query(False, description="Incluir rawReports en la respuesta"),
    settings: Settings = Depends(get_settings),
    service: LintService = Depends(get_lint_service),
):
    """
    Lintea un documento BPMN enviado en el body JSON.

    Args:
        body: `{"bpmnXml": "..."}` o `{"bpmnGzipBase64": "..."}`
        raw: Si es true, agrega `rawReports`

    Returns:
        LintResponse con status e issues normalizados
    """
    try:
        xml_text = extract_xml_text(
            bpmn_xml=body.bpmnXml,
            bpmn_gzip_base64=body.bpmnGzipBase64,
            max_bytes=settings.max_bpmn_bytes,
        )
    except BpmnInputError as e:
        raise _input_error(e)

    return _run_lint(xml_text, service, raw or settings.include_raw_reports)


@router.post("/upload", response_model=LintResponse, response_model_exclude_none=True)
def lint_bpmn_upload(
    file: UploadFile = File(..., description="Archivo .bpmn (plano o gzip)"),
    raw: bool = Query(False, description="Incluir rawReports en la respuesta"),
    settings: Settings = Depends(get_settings),
    service: LintService = Depends(get_lint_service),
):
    """
    Lintea un archivo BPMN subido como multipart/form-data.

    El archivo puede venir comprimido con gzip (se detecta por contenido, no
    por extensión).
    """
    # Leer como máximo un byte más que el límite para detectar excesos
    content = file.file.read(settings.max_bpmn_bytes + 1)
    logger.info(f"Archivo recibido: {file.filename} ({len(content)} bytes)")

    try:
        xml_text = decode_document_bytes(content, settings.max_bpmn_bytes)
    except BpmnInputError as e:
        raise _input_error(e)

    return _run_lint(xml_text, service, raw or settings.include_raw_reports)


@router.get("/rules", response_model=RulesResponse)
def list_rules(
    service: LintService = Depends(get_lint_service),
):
    """
    Devuelve la configuración efectiva del motor de reglas.

    Returns:
        Conjunto base, scope y categoría por regla
    """
    description = service.rule_engine.describe()
    return {
        "extends": description["extends"],
        "scope": service.scope,
        "rules": description["rules"],
    }
