"""
bpmn_lint_core.normalizer
=========================

Normalizador de resultados: convierte los hallazgos crudos del motor de reglas
en la forma estable que ve el cliente (`LintOutcome`).

Pasos
-----
1) Resolver severidad por hallazgo (override por regla → categoría → default).
2) Reemplazar ids faltantes por el centinela "root".
3) Deduplicar por (regla, id, mensaje) a través de TODAS las pasadas: el motor
   puede evaluar subárboles superpuestos (definitions + cada proceso) y
   reportar la misma violación más de una vez.
4) `status` = "error" si alguna severidad o categoría cae en el Blocking Set
   (la categoría no cuenta para reglas con override de severidad).

Es una función pura de (pasadas, tabla): no guarda estado entre requests.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Set, Tuple, Union

from .classification import ClassificationTable
from .domain_models import (
    ROOT_SENTINEL,
    LintOutcome,
    NormalizedIssue,
    RawFinding,
    RuleReportSet,
)

logger = logging.getLogger(__name__)

DEFAULT_TABLE = ClassificationTable()

FindingLike = Union[RawFinding, Mapping[str, Any]]


def resolve_severity(
    rule_name: str,
    category: Optional[str],
    table: ClassificationTable = DEFAULT_TABLE,
) -> str:
    """
    Severidad de un hallazgo según la tabla.

    El override por regla gana siempre, así una regla puede subir o bajar la
    severidad que le daría su categoría.
    """
    forced = table.rule_overrides.get(rule_name)
    if forced is not None:
        return forced
    if category is not None:
        mapped = table.category_map.get(category)
        if mapped is not None:
            return mapped
    return table.default_severity


def _as_finding(item: FindingLike) -> RawFinding:
    if isinstance(item, RawFinding):
        return item
    return RawFinding.from_mapping(item)


def is_blocking(issue: NormalizedIssue, table: ClassificationTable = DEFAULT_TABLE) -> bool:
    """
    Un issue bloquea si su severidad o su categoría cruda están en el Blocking
    Set. Si la regla tiene override, decide solo la severidad resuelta.
    """
    if issue.severity in table.blocking:
        return True
    if issue.rule in table.rule_overrides:
        return False
    return issue.category is not None and issue.category in table.blocking


def normalize_passes(
    passes: Iterable[Mapping[str, Sequence[FindingLike]]],
    table: ClassificationTable = DEFAULT_TABLE,
) -> LintOutcome:
    """
    Normaliza una o más pasadas del motor en un único `LintOutcome`.

    Args:
        passes: Secuencia de RuleReportSet. Los hallazgos pueden ser
            `RawFinding` o mappings con la forma JSON de bpmnlint.
        table: Tabla de clasificación (inmutable).

    Returns:
        LintOutcome con issues deduplicados en orden de primera aparición.
    """
    issues: List[NormalizedIssue] = []
    seen: Set[Tuple[str, str, str]] = set()
    total = 0

    for report_set in passes:
        for rule_name, findings in report_set.items():
            for item in findings or ():
                total += 1
                finding = _as_finding(item)
                issue = NormalizedIssue(
                    rule=rule_name,
                    id=finding.id or ROOT_SENTINEL,
                    message=finding.message,
                    severity=resolve_severity(rule_name, finding.category, table),  # type: ignore[arg-type]
                    category=finding.category,
                )
                if issue.key in seen:
                    continue
                seen.add(issue.key)
                issues.append(issue)

    status = "error" if any(is_blocking(issue, table) for issue in issues) else "ok"

    if total != len(issues):
        logger.debug(f"Deduplicados {total - len(issues)} hallazgos repetidos")

    return LintOutcome(status=status, issues=issues)


def normalize_reports(
    report_set: RuleReportSet,
    table: ClassificationTable = DEFAULT_TABLE,
) -> LintOutcome:
    """Atajo para una sola pasada."""
    return normalize_passes([report_set], table)
