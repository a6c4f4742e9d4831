"""
Interfaces del core.

- `DocumentParser`: XML → árbol BPMN
- `RuleEngine`: árbol → hallazgos por regla
"""

from .abstractions import DocumentParser, RuleEngine

__all__ = ["DocumentParser", "RuleEngine"]
