from __future__ import annotations

"""
bpmn_lint_core.bpmn.model
=========================

Árbol tipado de elementos BPMN.

Cada nodo XML relevante se convierte en un `BpmnElement` con:
- `type`: nombre estilo moddle (`bpmn:Process`, `bpmn:StartEvent`,
  `bpmndi:BPMNShape`...)
- `id`, `attrs` (atributos sin namespace) y `children`
- referencias resueltas por el parser: `source` / `target` en sequence flows,
  `incoming` / `outgoing` en flow nodes

La jerarquía de tipos (`SUPERTYPES`) permite preguntar `is_a("bpmn:Task")`
sobre un `bpmn:UserTask`, igual que las reglas de bpmnlint hacen con `is()`.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional


# ============================================================
# Jerarquía de tipos
# ============================================================

_TASKS = [
    "bpmn:Task",
    "bpmn:UserTask",
    "bpmn:ServiceTask",
    "bpmn:ScriptTask",
    "bpmn:SendTask",
    "bpmn:ReceiveTask",
    "bpmn:ManualTask",
    "bpmn:BusinessRuleTask",
]
_SUB_PROCESSES = ["bpmn:SubProcess", "bpmn:Transaction", "bpmn:AdHocSubProcess"]
_ACTIVITIES = _TASKS + _SUB_PROCESSES + ["bpmn:CallActivity"]
_CATCH_EVENTS = ["bpmn:StartEvent", "bpmn:IntermediateCatchEvent", "bpmn:BoundaryEvent"]
_THROW_EVENTS = ["bpmn:EndEvent", "bpmn:IntermediateThrowEvent"]
_EVENTS = _CATCH_EVENTS + _THROW_EVENTS
_GATEWAYS = [
    "bpmn:ExclusiveGateway",
    "bpmn:ParallelGateway",
    "bpmn:InclusiveGateway",
    "bpmn:ComplexGateway",
    "bpmn:EventBasedGateway",
]
_FLOW_NODES = _ACTIVITIES + _EVENTS + _GATEWAYS


def _build_supertypes() -> Dict[str, frozenset]:
    groups = {
        "bpmn:Task": _TASKS,
        "bpmn:SubProcess": _SUB_PROCESSES,
        "bpmn:Activity": _ACTIVITIES,
        "bpmn:CatchEvent": _CATCH_EVENTS,
        "bpmn:ThrowEvent": _THROW_EVENTS,
        "bpmn:Event": _EVENTS,
        "bpmn:Gateway": _GATEWAYS,
        "bpmn:FlowNode": _FLOW_NODES,
        "bpmn:FlowElement": _FLOW_NODES
        + [
            "bpmn:SequenceFlow",
            "bpmn:DataObject",
            "bpmn:DataObjectReference",
            "bpmn:DataStoreReference",
        ],
        "bpmn:FlowElementsContainer": ["bpmn:Process"] + _SUB_PROCESSES,
    }
    supertypes: Dict[str, set] = {}
    for parent, members in groups.items():
        for member in members:
            supertypes.setdefault(member, set()).add(parent)
    return {name: frozenset(parents) for name, parents in supertypes.items()}


SUPERTYPES: Dict[str, frozenset] = _build_supertypes()


def is_type(element_type: str, wanted: str) -> bool:
    """True si `element_type` es `wanted` o un subtipo suyo."""
    return element_type == wanted or wanted in SUPERTYPES.get(element_type, ())


# ============================================================
# Elemento
# ============================================================

@dataclass(eq=False)
class BpmnElement:
    """
    Nodo del árbol BPMN.

    Attributes:
        type: Tipo estilo moddle, p.ej. "bpmn:ExclusiveGateway".
        attrs: Atributos XML sin namespace (id, name, sourceRef, default...).
        children: Hijos en orden de documento.
        parent: Nodo padre (None en la raíz).
        text: Texto del nodo (expresiones de condición, documentación).
        incoming / outgoing: Sequence flows que entran/salen (flow nodes).
        source / target: Extremos resueltos (sequence flows).
    """
    type: str
    attrs: Dict[str, str] = field(default_factory=dict)
    children: List["BpmnElement"] = field(default_factory=list)
    parent: Optional["BpmnElement"] = field(default=None, repr=False)
    text: str = ""
    incoming: List["BpmnElement"] = field(default_factory=list, repr=False)
    outgoing: List["BpmnElement"] = field(default_factory=list, repr=False)
    source: Optional["BpmnElement"] = field(default=None, repr=False)
    target: Optional["BpmnElement"] = field(default=None, repr=False)

    @property
    def id(self) -> Optional[str]:
        return self.attrs.get("id")

    @property
    def name(self) -> str:
        return self.attrs.get("name", "")

    def is_a(self, wanted: str) -> bool:
        return is_type(self.type, wanted)

    def is_any(self, *wanted: str) -> bool:
        return any(self.is_a(w) for w in wanted)

    def flag(self, attr: str) -> bool:
        """Atributo booleano XML (`triggeredByEvent="true"`)."""
        return self.attrs.get(attr, "false").strip().lower() == "true"

    def walk(self) -> Iterator["BpmnElement"]:
        """Recorrido en profundidad, incluyéndose a sí mismo."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def children_of(self, *wanted: str) -> List["BpmnElement"]:
        return [child for child in self.children if child.is_any(*wanted)]

    @property
    def flow_elements(self) -> List["BpmnElement"]:
        return self.children_of("bpmn:FlowElement")

    @property
    def event_definitions(self) -> List["BpmnElement"]:
        return [child for child in self.children if child.type.endswith("EventDefinition")]

    @property
    def condition_expression(self) -> Optional["BpmnElement"]:
        found = self.children_of("bpmn:ConditionExpression")
        return found[0] if found else None

    def ancestors(self) -> Iterator["BpmnElement"]:
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    @property
    def root(self) -> "BpmnElement":
        node = self
        for node in self.ancestors():
            pass
        return node

    def __repr__(self) -> str:
        return f"<{self.type} id={self.id!r}>"
