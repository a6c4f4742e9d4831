from __future__ import annotations

from typing import Iterable

from ..bpmn.model import BpmnElement
from .base import LintContext, Rule, RuleReport

# Elementos que se dibujan y por lo tanto necesitan shape/edge en el diagrama
_VISUAL_TYPES = (
    "bpmn:FlowNode",
    "bpmn:SequenceFlow",
    "bpmn:Participant",
    "bpmn:MessageFlow",
    "bpmn:Lane",
    "bpmn:DataObjectReference",
    "bpmn:DataStoreReference",
    "bpmn:TextAnnotation",
    "bpmn:Association",
    "bpmn:Group",
)


class LabelRequired(Rule):
    name = "label-required"
    description = "Los elementos relevantes del diagrama tienen nombre."

    def check(self, node: BpmnElement, ctx: LintContext) -> Iterable[RuleReport]:
        if not node.is_any("bpmn:FlowNode", "bpmn:Participant", "bpmn:Lane"):
            return []
        if node.is_any("bpmn:ParallelGateway", "bpmn:EventBasedGateway", "bpmn:BoundaryEvent"):
            return []
        # Un gateway que solo une no necesita pregunta
        if node.is_a("bpmn:Gateway") and len(node.outgoing) <= 1:
            return []
        if node.name.strip():
            return []
        return [RuleReport(node.id, "Element is missing label/name")]


class NoBpmnDi(Rule):
    name = "no-bpmndi"
    description = "Todo elemento visual tiene su representación en el diagrama."

    def check(self, node: BpmnElement, ctx: LintContext) -> Iterable[RuleReport]:
        if not node.id or not node.is_any(*_VISUAL_TYPES):
            return []
        if node.id in ctx.di_element_ids:
            return []
        return [RuleReport(node.id, "Element is missing bpmndi")]
