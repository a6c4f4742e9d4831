from __future__ import annotations

"""
bpmn_lint_core.engine
=====================

Orquestador de alto nivel del pipeline de lint.

Este módulo expone una **API interna** y estable para correr el flujo completo
(parse → evaluate → normalize), sin preocuparse por:

- HTTP
- frameworks web
- detalles de CLI

La idea es que:

- La CLI (`cli.py`) y la API HTTP (`api/`) llamen a este módulo.
- Nadie más hable directo con el parser, el linter y el normalizador por
  separado.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Literal, Mapping, Sequence, TypedDict

from .bpmn.parser import BpmnParser, ParsedDocument
from .classification import ClassificationTable
from .config import Settings
from .core.abstractions import DocumentParser, RuleEngine
from .domain_models import LintOutcome, RawFinding, merge_report_sets
from .errors import LintConfigError
from .linter import Linter
from .normalizer import normalize_passes

logger = logging.getLogger(__name__)

LintScope = Literal["definitions", "root-elements", "all"]
LINT_SCOPES = ("definitions", "root-elements", "all")


class LintRunResult(TypedDict):
    """
    Resultado de una corrida completa del pipeline.

    Estructura simple y serializable, pensada para:
    - Devolver datos a la capa HTTP.
    - Realizar asserts en tests.
    """

    outcome: LintOutcome
    """Resultado normalizado (status + issues deduplicados)."""

    raw_reports: Dict[str, List[RawFinding]]
    """Todas las pasadas concatenadas por regla, sin deduplicar."""

    passes: List[Mapping[str, Sequence[RawFinding]]]
    """Un RuleReportSet por pasada de evaluación."""


def _evaluation_targets(document: ParsedDocument, scope: str):
    if scope == "definitions":
        return [document.root_element]
    if scope == "root-elements":
        return list(document.root_elements)
    if scope == "all":
        return [document.root_element, *document.root_elements]
    raise LintConfigError(f"Scope de lint desconocido: '{scope}'. Usar {', '.join(LINT_SCOPES)}")


def run_lint_pipeline(
    *,
    xml_text: str,
    parser: DocumentParser,
    rule_engine: RuleEngine,
    table: ClassificationTable,
    scope: str = "definitions",
) -> LintRunResult:
    """
    Ejecuta el pipeline de lint sobre un documento.

    Flujo:
    ------
    1) Parse: `parser.parse(xml_text)` → ParsedDocument (falla con
       BpmnInputError si el documento no sirve; no hay resultados parciales).
    2) Evaluate: una pasada del motor por cada objetivo del `scope`:
       - definitions   → la raíz
       - root-elements → cada proceso / colaboración de primer nivel
       - all           → ambas (se superponen; el normalizador deduplica)
    3) Normalize: `normalize_passes(passes, table)` → LintOutcome.

    Returns:
        LintRunResult con el outcome, los reportes crudos y las pasadas.
    """
    # 1) Parse
    document = parser.parse(xml_text)

    # 2) Evaluar
    passes = [rule_engine.evaluate(target) for target in _evaluation_targets(document, scope)]

    # 3) Normalizar
    outcome = normalize_passes(passes, table)

    logger.info(
        f"Lint completo: status={outcome.status}, issues={len(outcome.issues)}, pasadas={len(passes)}"
    )

    return LintRunResult(
        outcome=outcome,
        raw_reports=merge_report_sets(passes),
        passes=passes,
    )


@dataclass(frozen=True)
class LintService:
    """
    Colaboradores del pipeline ya construidos.

    Se arma una vez por proceso (ver `api.dependencies.get_lint_service`) y se
    comparte entre requests: ninguno guarda estado por request.
    """

    parser: DocumentParser
    rule_engine: RuleEngine
    table: ClassificationTable
    scope: str = "definitions"

    def __post_init__(self) -> None:
        if self.scope not in LINT_SCOPES:
            raise LintConfigError(
                f"Scope de lint desconocido: '{self.scope}'. Usar {', '.join(LINT_SCOPES)}"
            )

    @classmethod
    def from_settings(cls, settings: Settings) -> "LintService":
        return cls(
            parser=BpmnParser(),
            rule_engine=Linter.from_settings(settings),
            table=ClassificationTable.from_settings(settings),
            scope=settings.lint_scope,
        )

    def lint(self, xml_text: str) -> LintRunResult:
        return run_lint_pipeline(
            xml_text=xml_text,
            parser=self.parser,
            rule_engine=self.rule_engine,
            table=self.table,
            scope=self.scope,
        )
