"""
Catálogo de reglas de lint BPMN.

Los nombres de las reglas y los conjuntos `recommended` / `all` siguen la
convención de bpmnlint para que las configuraciones `.bpmnlintrc` existentes
sigan sirviendo.
"""

from .base import LintContext, Rule, RuleReport
from .registry import RECOMMENDED, RuleRegistry

__all__ = ["LintContext", "Rule", "RuleReport", "RECOMMENDED", "RuleRegistry"]
