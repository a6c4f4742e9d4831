"""
bpmn_lint_core.classification
=============================

Tabla de clasificación de severidades.

La tabla es configuración inmutable del proceso: se construye una vez al
arrancar (`ClassificationTable.from_settings`) y se pasa por referencia al
normalizador. No hay estado global mutable.

Precedencia (la aplica `normalizer.resolve_severity`):
1) override por regla
2) mapping por categoría cruda
3) severidad por defecto
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import FrozenSet, Mapping

from .config import Settings
from .errors import LintConfigError

SEVERITIES = frozenset({"error", "warning", "info"})

DEFAULT_CATEGORY_MAP: Mapping[str, str] = MappingProxyType(
    {
        "error": "error",
        "warn": "warning",
        "info": "info",
    }
)

DEFAULT_BLOCKING: FrozenSet[str] = frozenset({"error", "rule-error"})


@dataclass(frozen=True)
class ClassificationTable:
    """
    Attributes:
        rule_overrides: regla → severidad forzada (p.ej. una regla siempre informativa).
        category_map: categoría cruda → severidad.
        default_severity: severidad cuando nada de lo anterior aplica.
        blocking: severidades/categorías que marcan el resultado como "error".
    """

    rule_overrides: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    category_map: Mapping[str, str] = field(default_factory=lambda: DEFAULT_CATEGORY_MAP)
    default_severity: str = "warning"
    blocking: FrozenSet[str] = DEFAULT_BLOCKING

    def __post_init__(self) -> None:
        for rule_name, severity in self.rule_overrides.items():
            _check_severity(severity, f"override de '{rule_name}'")
        for category, severity in self.category_map.items():
            _check_severity(severity, f"categoría '{category}'")
        _check_severity(self.default_severity, "severidad por defecto")

        # Congelar lo que venga como dict plano
        object.__setattr__(self, "rule_overrides", MappingProxyType(dict(self.rule_overrides)))
        object.__setattr__(self, "category_map", MappingProxyType(dict(self.category_map)))
        object.__setattr__(self, "blocking", frozenset(self.blocking))

    @classmethod
    def from_settings(cls, settings: Settings) -> "ClassificationTable":
        return cls(
            rule_overrides=parse_pairs(settings.severity_overrides),
            default_severity=settings.severity_default.strip().lower(),
            blocking=frozenset(parse_list(settings.blocking_set)) or DEFAULT_BLOCKING,
        )


def _check_severity(value: str, where: str) -> None:
    if value not in SEVERITIES:
        raise LintConfigError(
            f"Severidad inválida en {where}: '{value}'. Valores válidos: {sorted(SEVERITIES)}"
        )


def parse_list(raw: str) -> list[str]:
    return [item.strip().lower() for item in raw.split(",") if item.strip()]


def parse_pairs(raw: str) -> dict[str, str]:
    """
    Parsea "clave=valor,clave=valor" a dict.

    >>> parse_pairs("label-required=warning, no-bpmndi = info")
    {'label-required': 'warning', 'no-bpmndi': 'info'}
    """
    pairs: dict[str, str] = {}
    for item in raw.split(","):
        item = item.strip()
        if not item:
            continue
        if "=" not in item:
            raise LintConfigError(f"Entrada inválida '{item}': se esperaba 'clave=valor'")
        key, value = item.split("=", 1)
        pairs[key.strip()] = value.strip().lower()
    return pairs
