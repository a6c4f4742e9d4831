"""
bpmn_lint_core.bpmn.parser
==========================

Parser de BPMN 2.0 XML → árbol de `BpmnElement`.

Responsabilidad
---------------
- Parsear el XML (ElementTree de la librería estándar).
- Convertir tags a tipos estilo moddle (`{MODEL}startEvent` → `bpmn:StartEvent`).
- Resolver referencias: `sourceRef` / `targetRef` de sequence flows y, a partir
  de ellos, `incoming` / `outgoing` de cada flow node.
- Validar que la raíz sea `bpmn:Definitions`.

NO hace:
--------
- Validación semántica del modelo (eso es trabajo de las reglas).
- Resolución de DI más allá de lo que cada regla necesite.

Errores
-------
- XML mal formado, con DOCTYPE o demasiado anidado → `BpmnParseError`
- Raíz distinta de `bpmn:Definitions` → `InvalidRootElementError`
- Documento vacío → `EmptyDocumentError`
"""

from __future__ import annotations

import logging
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..errors import BpmnParseError, EmptyDocumentError, InvalidRootElementError
from .model import BpmnElement

logger = logging.getLogger(__name__)


# ============================================================
# Namespaces
# ============================================================

BPMN_NS = "http://www.omg.org/spec/BPMN/20100524/MODEL"
BPMNDI_NS = "http://www.omg.org/spec/BPMN/20100524/DI"
DC_NS = "http://www.omg.org/spec/DD/20100524/DC"
DI_NS = "http://www.omg.org/spec/DD/20100524/DI"

PREFIXES = {
    BPMN_NS: "bpmn",
    BPMNDI_NS: "bpmndi",
    DC_NS: "dc",
    DI_NS: "di",
}

# Tags que en moddle son referencias (no elementos): se resuelven desde los flows.
REFERENCE_TAGS = {"incoming", "outgoing", "flowNodeRef", "sourceRef", "targetRef"}

# Hijos directos de definitions que NO son rootElements.
NON_ROOT_TYPES = {
    "bpmndi:BPMNDiagram",
    "bpmn:Import",
    "bpmn:Extension",
    "bpmn:Documentation",
    "bpmn:Relationship",
}

_DOCTYPE_RE = re.compile(r"<!DOCTYPE", re.IGNORECASE)

# Anidamiento máximo de elementos XML aceptado.
MAX_NESTING_DEPTH = 200


@dataclass
class ParsedDocument:
    """
    Resultado del parseo.

    Attributes:
        root_element: Nodo `bpmn:Definitions`.
        root_elements: Hijos de primer nivel (procesos, colaboraciones, mensajes...).
        elements_by_id: Índice de todos los elementos con id.
    """
    root_element: BpmnElement
    root_elements: List[BpmnElement] = field(default_factory=list)
    elements_by_id: Dict[str, BpmnElement] = field(default_factory=dict)


# ============================================================
# Helpers
# ============================================================

def _split_tag(tag: str) -> tuple[Optional[str], str]:
    if tag.startswith("{"):
        ns, local = tag[1:].split("}", 1)
        return ns, local
    return None, tag


def _type_name(tag: str) -> Optional[str]:
    """
    `{BPMN_NS}startEvent` → `bpmn:StartEvent`.

    Devuelve None para namespaces desconocidos (extensiones de vendors), que
    se descartan del árbol.
    """
    ns, local = _split_tag(tag)
    prefix = PREFIXES.get(ns or "")
    if prefix is None:
        return None
    return f"{prefix}:{local[:1].upper()}{local[1:]}"


def _check_depth(xml_root: ET.Element, limit: int = MAX_NESTING_DEPTH) -> None:
    stack = [(xml_root, 1)]
    while stack:
        node, depth = stack.pop()
        if depth > limit:
            raise BpmnParseError(
                f"El documento supera el anidamiento máximo permitido ({limit} niveles)"
            )
        stack.extend((child, depth + 1) for child in node)


def _local_attrs(node: ET.Element) -> Dict[str, str]:
    attrs: Dict[str, str] = {}
    for key, value in node.attrib.items():
        ns, local = _split_tag(key)
        # Los atributos con namespace (xsi:type, camunda:*) se guardan con prefijo
        attrs[local if ns is None else f"{{{ns}}}{local}"] = value
    return attrs


def _convert(node: ET.Element, parent: Optional[BpmnElement]) -> Optional[BpmnElement]:
    ns, local = _split_tag(node.tag)
    if ns == BPMN_NS and local in REFERENCE_TAGS:
        return None
    type_name = _type_name(node.tag)
    if type_name is None:
        return None

    element = BpmnElement(
        type=type_name,
        attrs=_local_attrs(node),
        parent=parent,
        text=(node.text or "").strip(),
    )
    for child in node:
        converted = _convert(child, element)
        if converted is not None:
            element.children.append(converted)
    return element


def _resolve_references(root: BpmnElement, index: Dict[str, BpmnElement]) -> None:
    for element in root.walk():
        if not element.is_a("bpmn:SequenceFlow"):
            continue
        source = index.get(element.attrs.get("sourceRef", ""))
        target = index.get(element.attrs.get("targetRef", ""))
        element.source = source
        element.target = target
        if source is not None:
            source.outgoing.append(element)
        if target is not None:
            target.incoming.append(element)


# ============================================================
# API pública
# ============================================================

class BpmnParser:
    """
    Implementación de `DocumentParser` sobre ElementTree.

    No guarda estado entre llamadas: una única instancia se comparte entre
    requests.
    """

    def parse(self, xml_text: str) -> ParsedDocument:
        if not xml_text or not xml_text.strip():
            raise EmptyDocumentError("El documento BPMN está vacío")

        if _DOCTYPE_RE.search(xml_text):
            raise BpmnParseError("No se permiten declaraciones DOCTYPE en el documento BPMN")

        try:
            xml_root = ET.fromstring(xml_text)
        except ET.ParseError as e:
            raise BpmnParseError(f"XML inválido: {e}") from e

        _check_depth(xml_root)

        root = _convert(xml_root, None)
        if root is None or root.type != "bpmn:Definitions":
            found = root.type if root is not None else xml_root.tag
            raise InvalidRootElementError(
                f"Se esperaba <bpmn:definitions> como raíz, se encontró {found}"
            )

        index: Dict[str, BpmnElement] = {}
        for element in root.walk():
            if element.id:
                index.setdefault(element.id, element)

        _resolve_references(root, index)

        root_elements = [child for child in root.children if child.type not in NON_ROOT_TYPES]

        logger.debug(
            f"BPMN parseado: {len(index)} elementos con id, {len(root_elements)} rootElements"
        )
        return ParsedDocument(root_element=root, root_elements=root_elements, elements_by_id=index)


def parse_bpmn(xml_text: str) -> ParsedDocument:
    """Atajo funcional sobre `BpmnParser().parse`."""
    return BpmnParser().parse(xml_text)
