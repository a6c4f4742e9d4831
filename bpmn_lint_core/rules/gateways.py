from __future__ import annotations

from typing import Iterable

from ..bpmn.model import BpmnElement
from .base import LintContext, Rule, RuleReport


class SuperfluousGateway(Rule):
    name = "superfluous-gateway"
    description = "Un gateway con una sola entrada y una sola salida sobra."

    def check(self, node: BpmnElement, ctx: LintContext) -> Iterable[RuleReport]:
        if not node.is_a("bpmn:Gateway") or node.is_a("bpmn:EventBasedGateway"):
            return []
        if len(node.incoming) == 1 and len(node.outgoing) == 1:
            return [RuleReport(node.id, "Gateway is superfluous. It only has one source and target.")]
        return []


class NoGatewayJoinFork(Rule):
    name = "no-gateway-join-fork"
    description = "Un gateway une o bifurca, no ambas cosas."

    def check(self, node: BpmnElement, ctx: LintContext) -> Iterable[RuleReport]:
        if not node.is_a("bpmn:Gateway"):
            return []
        if len(node.incoming) > 1 and len(node.outgoing) > 1:
            return [RuleReport(node.id, "Gateway forks and joins")]
        return []


class _DiscouragedType(Rule):
    element_type: str

    def check(self, node: BpmnElement, ctx: LintContext) -> Iterable[RuleReport]:
        if node.type == self.element_type:
            return [RuleReport(node.id, f"Element type <{self.element_type}> is discouraged")]
        return []


class NoComplexGateway(_DiscouragedType):
    name = "no-complex-gateway"
    description = "Desaconseja gateways complejos."
    element_type = "bpmn:ComplexGateway"


class NoInclusiveGateway(_DiscouragedType):
    name = "no-inclusive-gateway"
    description = "Desaconseja gateways inclusivos."
    element_type = "bpmn:InclusiveGateway"
