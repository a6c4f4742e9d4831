from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

from ..bpmn.model import BpmnElement
from .base import (
    LintContext,
    Rule,
    RuleReport,
    has_link_definition,
    in_ad_hoc_sub_process,
    is_compensation,
    is_default_flow,
    is_event_sub_process,
)


def _exempt_from_flow_checks(node: BpmnElement) -> bool:
    """Nodos que legítimamente no participan del flujo de secuencia."""
    return (
        in_ad_hoc_sub_process(node)
        or is_event_sub_process(node)
        or is_compensation(node)
    )


def _unconditional(node: BpmnElement) -> List[BpmnElement]:
    return [
        flow
        for flow in node.outgoing
        if flow.condition_expression is None and not is_default_flow(node, flow)
    ]


class NoDisconnected(Rule):
    name = "no-disconnected"
    description = "Todo flow node debe estar conectado."

    def check(self, node: BpmnElement, ctx: LintContext) -> Iterable[RuleReport]:
        if not node.is_a("bpmn:FlowNode") or _exempt_from_flow_checks(node):
            return []
        if node.incoming or node.outgoing:
            return []
        return [RuleReport(node.id, "Element is not connected")]


class NoImplicitStart(Rule):
    name = "no-implicit-start"
    description = "Solo los eventos de inicio pueden carecer de flujos entrantes."

    def check(self, node: BpmnElement, ctx: LintContext) -> Iterable[RuleReport]:
        if not node.is_a("bpmn:FlowNode") or _exempt_from_flow_checks(node):
            return []
        if node.is_any("bpmn:StartEvent", "bpmn:BoundaryEvent"):
            return []
        if node.is_a("bpmn:IntermediateCatchEvent") and has_link_definition(node):
            return []
        if node.incoming:
            return []
        return [RuleReport(node.id, "Element is an implicit start")]


class NoImplicitEnd(Rule):
    name = "no-implicit-end"
    description = "Solo los eventos de fin pueden carecer de flujos salientes."

    def check(self, node: BpmnElement, ctx: LintContext) -> Iterable[RuleReport]:
        if not node.is_a("bpmn:FlowNode") or _exempt_from_flow_checks(node):
            return []
        if node.is_a("bpmn:EndEvent"):
            return []
        if node.is_a("bpmn:IntermediateThrowEvent") and has_link_definition(node):
            return []
        if node.outgoing:
            return []
        return [RuleReport(node.id, "Element is an implicit end")]


class NoImplicitSplit(Rule):
    name = "no-implicit-split"
    description = "Las bifurcaciones se modelan con gateways, no con flujos múltiples."

    def check(self, node: BpmnElement, ctx: LintContext) -> Iterable[RuleReport]:
        if not node.is_any("bpmn:Activity", "bpmn:Event"):
            return []
        if len(_unconditional(node)) > 1:
            return [RuleReport(node.id, "Flow splits implicitly")]
        return []


class FakeJoin(Rule):
    name = "fake-join"
    description = "Las uniones se modelan con gateways, no con flujos entrantes múltiples."

    def check(self, node: BpmnElement, ctx: LintContext) -> Iterable[RuleReport]:
        if not node.is_a("bpmn:Activity"):
            return []
        if len(node.incoming) > 1:
            return [RuleReport(node.id, "Incoming flows do not join")]
        return []


class ConditionalFlows(Rule):
    name = "conditional-flows"
    description = "Los flujos salientes de una decisión llevan condición o son default."

    def check(self, node: BpmnElement, ctx: LintContext) -> Iterable[RuleReport]:
        if node.is_any("bpmn:ExclusiveGateway", "bpmn:InclusiveGateway", "bpmn:ComplexGateway"):
            needs_conditions = len(node.outgoing) > 1
        elif node.is_a("bpmn:Activity"):
            needs_conditions = any(f.condition_expression is not None for f in node.outgoing)
        else:
            return []

        reports: List[RuleReport] = []
        for flow in node.outgoing:
            if is_default_flow(node, flow):
                if flow.condition_expression is not None:
                    reports.append(RuleReport(flow.id, "Default flow must not have condition"))
                continue
            if needs_conditions and flow.condition_expression is None:
                reports.append(RuleReport(flow.id, "Sequence flow is missing condition"))
        return reports


class NoDuplicateSequenceFlows(Rule):
    name = "no-duplicate-sequence-flows"
    description = "No puede haber dos sequence flows iguales entre los mismos nodos."

    def check(self, node: BpmnElement, ctx: LintContext) -> Iterable[RuleReport]:
        if not node.is_a("bpmn:FlowElementsContainer"):
            return []

        groups: Dict[Tuple[str, str, str], List[BpmnElement]] = {}
        for flow in node.children_of("bpmn:SequenceFlow"):
            condition = flow.condition_expression
            key = (
                flow.attrs.get("sourceRef", ""),
                flow.attrs.get("targetRef", ""),
                condition.text if condition is not None else "",
            )
            groups.setdefault(key, []).append(flow)

        reports: List[RuleReport] = []
        for (source_ref, target_ref, _), flows in groups.items():
            if len(flows) < 2:
                continue
            for duplicate in flows[1:]:
                reports.append(RuleReport(duplicate.id, "SequenceFlow is a duplicate"))
            reports.append(RuleReport(source_ref or None, "Duplicate outgoing sequence flows"))
            reports.append(RuleReport(target_ref or None, "Duplicate incoming sequence flows"))
        return reports
