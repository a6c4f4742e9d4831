"""
Abstracciones (Protocols) para los colaboradores del pipeline de lint.

El orquestador (`engine.run_lint_pipeline`) solo depende de estas
interfaces: el parser y el motor de reglas se pueden reemplazar (p.ej. en
tests) sin tocar el normalizador ni la capa HTTP.
"""

from __future__ import annotations

from typing import Dict, Mapping, Protocol, Sequence

from ..bpmn.model import BpmnElement
from ..bpmn.parser import ParsedDocument
from ..domain_models import RawFinding


class DocumentParser(Protocol):
    """
    Convierte texto XML BPMN en un árbol tipado.
    """

    def parse(self, xml_text: str) -> ParsedDocument:
        """
        Parsea el documento.

        Args:
            xml_text: BPMN 2.0 XML completo.

        Returns:
            ParsedDocument con `root_element` (bpmn:Definitions) y
            `root_elements` (procesos, colaboraciones...).

        Raises:
            BpmnInputError: documento vacío, XML inválido o raíz incorrecta.
        """
        ...


class RuleEngine(Protocol):
    """
    Evalúa un conjunto fijo de reglas sobre un elemento o subárbol.
    """

    def evaluate(self, element: BpmnElement) -> Mapping[str, Sequence[RawFinding]]:
        """
        Args:
            element: Raíz del subárbol a evaluar.

        Returns:
            Regla → hallazgos, en orden de evaluación. No lanza excepciones
            para entradas estructuralmente válidas.
        """
        ...

    def describe(self) -> Dict[str, object]:
        """Conjunto base y categoría efectiva por regla ("off" si no corre)."""
        ...
