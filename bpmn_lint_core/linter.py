"""
bpmn_lint_core.linter
=====================

Motor de reglas: evalúa las reglas habilitadas sobre un elemento (o subárbol)
y devuelve un `RuleReportSet`.

Comportamiento
--------------
- Recorre el subárbol en profundidad y corre cada regla habilitada sobre cada
  nodo.
- Cada hallazgo recibe como categoría la configurada para su regla
  (error / warn / info).
- Si una regla lanza una excepción, se registra un único hallazgo
  `rule-error` para esa regla (sin id) y la evaluación sigue con las demás.
- Solo aparecen en el resultado las reglas que reportaron algo.

Una instancia es inmutable después de construirse y se comparte entre
requests.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from .bpmn.model import BpmnElement
from .config import Settings
from .domain_models import RawFinding
from .lint_config import LintConfig
from .rules.base import LintContext
from .rules.registry import RuleRegistry

logger = logging.getLogger(__name__)


class Linter:

    def __init__(self, config: Optional[LintConfig] = None, registry: Optional[RuleRegistry] = None):
        self.config = config or LintConfig()
        self.registry = registry or RuleRegistry.default()
        self.rule_categories: Mapping[str, str] = MappingProxyType(self.config.resolve(self.registry))

    @classmethod
    def from_settings(cls, settings: Settings) -> "Linter":
        linter = cls(LintConfig.from_settings(settings))
        logger.info(
            f"Linter listo: conjunto '{linter.config.extends}', "
            f"{len(linter.rule_categories)} reglas habilitadas"
        )
        return linter

    def evaluate(self, element: BpmnElement) -> Dict[str, List[RawFinding]]:
        ctx = LintContext.for_element(element)
        reports: Dict[str, List[RawFinding]] = {}
        failed = set()

        for node in element.walk():
            for rule_name, category in self.rule_categories.items():
                if rule_name in failed:
                    continue
                rule = self.registry.get(rule_name)
                try:
                    found = list(rule.check(node, ctx))
                except Exception as e:
                    logger.exception(f"La regla '{rule_name}' falló sobre {node!r}")
                    failed.add(rule_name)
                    reports[rule_name] = [
                        RawFinding(message=f"Rule error: {e}", category="rule-error")
                    ]
                    continue
                for report in found:
                    reports.setdefault(rule_name, []).append(
                        RawFinding(message=report.message, id=report.id, category=category)
                    )

        return reports

    def describe(self) -> Dict[str, object]:
        return {
            "extends": self.config.extends,
            "rules": {
                name: self.rule_categories.get(name, "off") for name in self.registry.names()
            },
        }
