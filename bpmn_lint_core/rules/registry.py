from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping

from .base import Rule
from .events import (
    EndEventRequired,
    EventSubProcessTypedStartEvent,
    SingleBlankStartEvent,
    SingleEventDefinition,
    StartEventRequired,
    SubProcessBlankStartEvent,
)
from .flows import (
    ConditionalFlows,
    FakeJoin,
    NoDisconnected,
    NoDuplicateSequenceFlows,
    NoImplicitEnd,
    NoImplicitSplit,
    NoImplicitStart,
)
from .gateways import NoComplexGateway, NoGatewayJoinFork, NoInclusiveGateway, SuperfluousGateway
from .presentation import LabelRequired, NoBpmnDi


# Categoría de cada regla en el conjunto "recommended" (misma convención que bpmnlint)
RECOMMENDED: Mapping[str, str] = MappingProxyType({
    "conditional-flows": "error",
    "end-event-required": "error",
    "event-sub-process-typed-start-event": "error",
    "fake-join": "warn",
    "label-required": "error",
    "no-bpmndi": "error",
    "no-disconnected": "error",
    "no-duplicate-sequence-flows": "error",
    "no-gateway-join-fork": "error",
    "no-implicit-end": "error",
    "no-implicit-split": "error",
    "no-implicit-start": "error",
    "single-blank-start-event": "error",
    "single-event-definition": "error",
    "start-event-required": "error",
    "sub-process-blank-start-event": "error",
    "superfluous-gateway": "warn",
})


class RuleRegistry:

    def __init__(self, rules: Iterable[Rule]):
        self.rules: Dict[str, Rule] = {rule.name: rule for rule in rules}

    @staticmethod
    def default() -> "RuleRegistry":

        rules = [
            ConditionalFlows(),
            EndEventRequired(),
            EventSubProcessTypedStartEvent(),
            FakeJoin(),
            LabelRequired(),
            NoBpmnDi(),
            NoComplexGateway(),
            NoDisconnected(),
            NoDuplicateSequenceFlows(),
            NoGatewayJoinFork(),
            NoImplicitEnd(),
            NoImplicitSplit(),
            NoImplicitStart(),
            NoInclusiveGateway(),
            SingleBlankStartEvent(),
            SingleEventDefinition(),
            StartEventRequired(),
            SubProcessBlankStartEvent(),
            SuperfluousGateway(),
        ]

        return RuleRegistry(rules)

    def names(self) -> List[str]:
        return sorted(self.rules)

    def get(self, name: str) -> Rule:
        return self.rules[name]

    def __contains__(self, name: object) -> bool:
        return name in self.rules

    def rule_set(self, name: str) -> Dict[str, str]:
        """
        Categorías por regla de un conjunto nombrado.

        Raises:
            KeyError: si el conjunto no existe.
        """
        if name == "recommended":
            return {rule: category for rule, category in RECOMMENDED.items() if rule in self.rules}
        if name == "all":
            return {rule: "error" for rule in self.rules}
        raise KeyError(name)
