"""
bpmn_lint_core.cli
==================

Punto de entrada mínimo para lintear un archivo BPMN desde disco, sin HTTP:

1) Leer el archivo (.bpmn plano o comprimido con gzip).
2) Parsearlo y correr las reglas configuradas (mismas variables de entorno
   que la API: BPMNLINT_CONFIG, BPMNLINT_RULES, LINT_SCOPE, SEVERITY_*...).
3) Imprimir el `LintOutcome` como JSON.

Código de salida: 0 si status="ok", 1 si status="error", 2 si el documento no
se pudo procesar.

Uso:
    python -m bpmn_lint_core.cli diagrama.bpmn [--raw] [--scope all]
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from .config import get_settings
from .engine import LINT_SCOPES, LintService
from .errors import BpmnInputError
from .ingest import decode_document_bytes

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Lintea un diagrama BPMN 2.0")
    parser.add_argument("path", type=Path, help="Archivo .bpmn (plano o .gz)")
    parser.add_argument("--raw", action="store_true", help="Incluir rawReports en la salida")
    parser.add_argument("--scope", choices=LINT_SCOPES, default=None, help="Pasadas de evaluación")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    settings = get_settings()
    logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO))
    if args.scope:
        settings = replace(settings, lint_scope=args.scope)

    service = LintService.from_settings(settings)

    try:
        xml_text = decode_document_bytes(args.path.read_bytes(), settings.max_bpmn_bytes)
        result = service.lint(xml_text)
    except FileNotFoundError:
        print(f"❌ No existe el archivo: {args.path}", file=sys.stderr)
        return 2
    except BpmnInputError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 2

    payload = result["outcome"].to_dict()
    if args.raw or settings.include_raw_reports:
        payload["rawReports"] = {
            rule: [finding.to_dict() for finding in findings]
            for rule, findings in result["raw_reports"].items()
        }

    print(json.dumps(payload, indent=2, ensure_ascii=False))
    return 0 if result["outcome"].status == "ok" else 1


if __name__ == "__main__":
    sys.exit(main())
