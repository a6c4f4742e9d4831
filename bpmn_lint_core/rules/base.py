from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Optional

from ..bpmn.model import BpmnElement


@dataclass(frozen=True)
class RuleReport:
    """Violación reportada por una regla, antes de asignarle categoría."""
    id: Optional[str]
    message: str


@dataclass(frozen=True)
class LintContext:
    """
    Datos compartidos por todas las reglas durante una evaluación.

    `di_element_ids` son los ids referenciados por `bpmndi:BPMNShape` /
    `bpmndi:BPMNEdge` en todo el documento, no solo en el subárbol evaluado.
    """
    root: BpmnElement
    di_element_ids: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def for_element(cls, element: BpmnElement) -> "LintContext":
        root = element.root
        di_ids = frozenset(
            node.attrs["bpmnElement"]
            for node in root.walk()
            if node.type in ("bpmndi:BPMNShape", "bpmndi:BPMNEdge") and node.attrs.get("bpmnElement")
        )
        return cls(root=root, di_element_ids=di_ids)


class Rule(ABC):
    name: str
    description: str

    @abstractmethod
    def check(self, node: BpmnElement, ctx: LintContext) -> Iterable[RuleReport]:
        ...


# ============================================================
# Helpers compartidos entre reglas
# ============================================================

def container_label(node: BpmnElement) -> str:
    return "Sub process" if node.is_a("bpmn:SubProcess") else "Process"


def is_event_sub_process(node: Optional[BpmnElement]) -> bool:
    return node is not None and node.is_a("bpmn:SubProcess") and node.flag("triggeredByEvent")


def in_ad_hoc_sub_process(node: BpmnElement) -> bool:
    return node.parent is not None and node.parent.is_a("bpmn:AdHocSubProcess")


def is_default_flow(node: BpmnElement, flow: BpmnElement) -> bool:
    return bool(flow.id) and node.attrs.get("default") == flow.id


def is_compensation(node: BpmnElement) -> bool:
    if node.flag("isForCompensation"):
        return True
    return node.is_a("bpmn:BoundaryEvent") and any(
        d.type == "bpmn:CompensateEventDefinition" for d in node.event_definitions
    )


def has_link_definition(node: BpmnElement) -> bool:
    return any(d.type == "bpmn:LinkEventDefinition" for d in node.event_definitions)
