from __future__ import annotations

"""
bpmn_lint_core.domain_models
============================

Modelos de dominio (dataclasses) que viajan entre el motor de reglas,
el normalizador y la capa HTTP.

- `RawFinding`: un hallazgo crudo tal como lo reporta una regla.
- `RuleReportSet`: mapping regla → lista de hallazgos crudos (una pasada).
- `NormalizedIssue`: la unidad visible para el cliente.
- `LintOutcome`: payload final (`status` + `issues`).

Principios de diseño
--------------------
- Dataclasses congeladas: todo se construye por request y se descarta.
- Sin lógica de clasificación acá; eso vive en `normalizer`.
- `to_dict()` define la forma JSON que ve el cliente.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Mapping, Optional, Sequence


# ============================================================
# Tipos base
# ============================================================

Severity = Literal["error", "warning", "info"]
"""Severidades visibles para el cliente."""

Status = Literal["ok", "error"]

ROOT_SENTINEL = "root"
"""Id usado cuando un hallazgo no está asociado a ningún elemento."""


# ============================================================
# Hallazgos crudos
# ============================================================

@dataclass(frozen=True)
class RawFinding:
    """
    Un hallazgo del motor de reglas.

    Attributes:
        id:
            Id del elemento BPMN que viola la regla. None para hallazgos a
            nivel documento (p.ej. una regla que falló con `rule-error`).
        message:
            Mensaje legible de la regla.
        category:
            Categoría cruda: "error", "warn", "info", "rule-error"... Puede
            faltar; en ese caso el normalizador usa la severidad por defecto.
    """
    message: str
    id: Optional[str] = None
    category: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "RawFinding":
        """Acepta la forma JSON de bpmnlint (`id` o `elementId`)."""
        element_id = data.get("id", data.get("elementId"))
        category = data.get("category")
        return cls(
            message=str(data.get("message") or ""),
            id=str(element_id) if element_id not in (None, "") else None,
            category=str(category) if category is not None else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"message": self.message}
        if self.id is not None:
            out["id"] = self.id
        if self.category is not None:
            out["category"] = self.category
        return out


RuleReportSet = Mapping[str, Sequence[RawFinding]]
"""Resultado de una pasada del motor: regla → hallazgos, en orden de evaluación."""


def merge_report_sets(passes: Sequence[RuleReportSet]) -> Dict[str, List[RawFinding]]:
    """
    Concatena varias pasadas por regla, sin deduplicar.

    Se usa para exponer `rawReports` tal cual los produjo el motor.
    """
    merged: Dict[str, List[RawFinding]] = {}
    for report_set in passes:
        for rule_name, findings in report_set.items():
            merged.setdefault(rule_name, []).extend(findings)
    return merged


# ============================================================
# Resultado normalizado
# ============================================================

@dataclass(frozen=True)
class NormalizedIssue:
    """
    Issue visible para el cliente.

    `category` guarda la categoría cruda para decidir el `status` global,
    pero no se serializa.
    """
    rule: str
    id: str
    message: str
    severity: Severity
    category: Optional[str] = None

    @property
    def key(self) -> tuple[str, str, str]:
        return (self.rule, self.id, self.message)

    def to_dict(self) -> Dict[str, str]:
        return {
            "rule": self.rule,
            "id": self.id,
            "message": self.message,
            "severity": self.severity,
        }


@dataclass(frozen=True)
class LintOutcome:
    status: Status
    issues: List[NormalizedIssue] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "issues": [issue.to_dict() for issue in self.issues],
        }
