"""Modelo y parser de documentos BPMN 2.0."""

from .model import BpmnElement
from .parser import BpmnParser, ParsedDocument, parse_bpmn

__all__ = ["BpmnElement", "BpmnParser", "ParsedDocument", "parse_bpmn"]
