from __future__ import annotations

import base64
import binascii
import gzip
import io
import zlib
from typing import Optional

from .errors import DocumentTooLargeError, EmptyDocumentError, InputDecodingError

"""
bpmn_lint_core.ingest
=====================

Extracción del documento BPMN (entrada → texto XML).

Responsabilidad
----------------
Este módulo se encarga exclusivamente de convertir lo que llega por HTTP (o
desde disco) en un único string XML:

- string plano (`bpmnXml` en el body JSON)
- gzip + base64 (`bpmnGzipBase64` en el body JSON)
- bytes de un archivo subido (gzip detectado por magic bytes)

NO hace:
---------
- Parseo XML
- Validación BPMN

Diseño
------
- Límite de tamaño antes y después de descomprimir (evita gzip bombs).
- UTF-8, con o sin BOM.
- Cualquier problema → `InputDecodingError` / `DocumentTooLargeError`.
"""

# ============================================================
# Constantes
# ============================================================

GZIP_MAGIC = b"\x1f\x8b"
DEFAULT_MAX_BYTES = 5 * 1024 * 1024


# ============================================================
# Helpers
# ============================================================

def _ensure_within_limit(size: int, max_bytes: int) -> None:
    if size > max_bytes:
        raise DocumentTooLargeError(
            f"El documento supera el tamaño máximo permitido ({max_bytes} bytes)"
        )


def _gunzip(data: bytes, max_bytes: int) -> bytes:
    """
    Descomprime leyendo como máximo `max_bytes + 1` para detectar excesos sin
    materializar el contenido completo.
    """
    try:
        with gzip.GzipFile(fileobj=io.BytesIO(data)) as fh:
            out = fh.read(max_bytes + 1)
    except (OSError, EOFError, zlib.error) as e:
        raise InputDecodingError(f"No se pudo descomprimir el documento gzip: {e}") from e
    _ensure_within_limit(len(out), max_bytes)
    return out


def _decode_text(data: bytes) -> str:
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise InputDecodingError(f"El documento no es UTF-8 válido: {e}") from e


# ============================================================
# API pública
# ============================================================

def decode_document_bytes(data: bytes, max_bytes: int = DEFAULT_MAX_BYTES) -> str:
    """
    Bytes de un archivo (plano o gzip) → texto XML.

    Raises:
        EmptyDocumentError: si no hay contenido.
        DocumentTooLargeError: si supera `max_bytes` (comprimido o no).
        InputDecodingError: gzip roto o encoding inválido.
    """
    if not data:
        raise EmptyDocumentError("El archivo subido está vacío")
    _ensure_within_limit(len(data), max_bytes)
    if data[:2] == GZIP_MAGIC:
        data = _gunzip(data, max_bytes)
    return _decode_text(data)


def decode_gzip_base64(blob: str, max_bytes: int = DEFAULT_MAX_BYTES) -> str:
    """gzip + base64 → texto XML."""
    _ensure_within_limit(len(blob), max_bytes)
    try:
        raw = base64.b64decode(blob.strip(), validate=True)
    except (binascii.Error, ValueError) as e:
        raise InputDecodingError(f"bpmnGzipBase64 no es base64 válido: {e}") from e
    if raw[:2] != GZIP_MAGIC:
        raise InputDecodingError("bpmnGzipBase64 no contiene datos gzip")
    return _decode_text(_gunzip(raw, max_bytes))


def extract_xml_text(
    *,
    bpmn_xml: Optional[str] = None,
    bpmn_gzip_base64: Optional[str] = None,
    max_bytes: int = DEFAULT_MAX_BYTES,
) -> str:
    """
    Elige la fuente del documento en un body JSON.

    Si vienen ambos campos gana `bpmn_xml`.

    Raises:
        EmptyDocumentError: si no viene ninguno (o vienen vacíos).
    """
    if isinstance(bpmn_xml, str) and bpmn_xml.strip():
        _ensure_within_limit(len(bpmn_xml.encode("utf-8")), max_bytes)
        return bpmn_xml
    if isinstance(bpmn_gzip_base64, str) and bpmn_gzip_base64.strip():
        return decode_gzip_base64(bpmn_gzip_base64, max_bytes)
    raise EmptyDocumentError("Missing bpmnXml string in JSON body")
