from __future__ import annotations

from typing import Iterable

from ..bpmn.model import BpmnElement
from .base import (
    LintContext,
    Rule,
    RuleReport,
    container_label,
    is_event_sub_process,
)


def _is_lintable_container(node: BpmnElement) -> bool:
    # Los ad-hoc no tienen inicio/fin obligatorios
    return node.is_any("bpmn:Process", "bpmn:SubProcess") and not node.is_a("bpmn:AdHocSubProcess")


class StartEventRequired(Rule):
    name = "start-event-required"
    description = "Procesos y subprocesos deben tener un evento de inicio."

    def check(self, node: BpmnElement, ctx: LintContext) -> Iterable[RuleReport]:
        if not _is_lintable_container(node):
            return []
        if node.children_of("bpmn:StartEvent"):
            return []
        return [RuleReport(node.id, f"{container_label(node)} is missing start event")]


class EndEventRequired(Rule):
    name = "end-event-required"
    description = "Procesos y subprocesos deben tener un evento de fin."

    def check(self, node: BpmnElement, ctx: LintContext) -> Iterable[RuleReport]:
        if not _is_lintable_container(node):
            return []
        if node.children_of("bpmn:EndEvent"):
            return []
        return [RuleReport(node.id, f"{container_label(node)} is missing end event")]


class SingleBlankStartEvent(Rule):
    name = "single-blank-start-event"
    description = "Un contenedor no puede tener más de un evento de inicio vacío."

    def check(self, node: BpmnElement, ctx: LintContext) -> Iterable[RuleReport]:
        if not node.is_a("bpmn:FlowElementsContainer"):
            return []
        blank = [e for e in node.children_of("bpmn:StartEvent") if not e.event_definitions]
        if len(blank) > 1:
            return [RuleReport(node.id, f"{container_label(node)} has multiple blank start events")]
        return []


class SingleEventDefinition(Rule):
    name = "single-event-definition"
    description = "Un evento tiene como máximo una definición."

    def check(self, node: BpmnElement, ctx: LintContext) -> Iterable[RuleReport]:
        if not node.is_a("bpmn:Event"):
            return []
        if len(node.event_definitions) > 1:
            return [RuleReport(node.id, "Event has multiple event definitions")]
        return []


class SubProcessBlankStartEvent(Rule):
    name = "sub-process-blank-start-event"
    description = "Los subprocesos embebidos arrancan con un evento de inicio vacío."

    def check(self, node: BpmnElement, ctx: LintContext) -> Iterable[RuleReport]:
        if not node.is_a("bpmn:SubProcess") or is_event_sub_process(node):
            return []
        return [
            RuleReport(start.id, "Start event must be blank")
            for start in node.children_of("bpmn:StartEvent")
            if start.event_definitions
        ]


class EventSubProcessTypedStartEvent(Rule):
    name = "event-sub-process-typed-start-event"
    description = "Los event subprocesses arrancan con un evento de inicio tipado."

    def check(self, node: BpmnElement, ctx: LintContext) -> Iterable[RuleReport]:
        if not is_event_sub_process(node):
            return []
        return [
            RuleReport(start.id, "Start event is missing event definition")
            for start in node.children_of("bpmn:StartEvent")
            if not start.event_definitions
        ]
