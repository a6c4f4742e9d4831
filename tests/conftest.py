"""
Fixtures compartidas: documentos BPMN de ejemplo.
"""

import pytest

NAMESPACES = (
    'xmlns:bpmn="http://www.omg.org/spec/BPMN/20100524/MODEL" '
    'xmlns:bpmndi="http://www.omg.org/spec/BPMN/20100524/DI" '
    'xmlns:dc="http://www.omg.org/spec/DD/20100524/DC" '
    'xmlns:di="http://www.omg.org/spec/DD/20100524/DI" '
    'xmlns:camunda="http://camunda.org/schema/1.0/bpmn"'
)


def make_definitions(body: str, diagram: str = "") -> str:
    """Envuelve `body` (procesos, colaboraciones...) en un bpmn:definitions."""
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<bpmn:definitions {NAMESPACES} id="Definitions_1" '
        'targetNamespace="http://bpmn.io/schema/bpmn">\n'
        f"{body}\n{diagram}\n"
        "</bpmn:definitions>"
    )


def make_diagram(*element_ids: str) -> str:
    shapes = "\n".join(
        f'<bpmndi:BPMNShape id="{eid}_di" bpmnElement="{eid}">'
        '<dc:Bounds x="0" y="0" width="10" height="10" /></bpmndi:BPMNShape>'
        for eid in element_ids
    )
    return (
        '<bpmndi:BPMNDiagram id="Diagram_1">'
        f'<bpmndi:BPMNPlane id="Plane_1" bpmnElement="Process_1">{shapes}</bpmndi:BPMNPlane>'
        "</bpmndi:BPMNDiagram>"
    )


VALID_PROCESS = """
  <bpmn:process id="Process_1" isExecutable="false">
    <bpmn:startEvent id="Start_1" name="Pedido recibido">
      <bpmn:outgoing>Flow_1</bpmn:outgoing>
    </bpmn:startEvent>
    <bpmn:task id="Task_1" name="Revisar pedido">
      <bpmn:extensionElements>
        <camunda:properties><camunda:property name="sla" value="2h" /></camunda:properties>
      </bpmn:extensionElements>
      <bpmn:incoming>Flow_1</bpmn:incoming>
      <bpmn:outgoing>Flow_2</bpmn:outgoing>
    </bpmn:task>
    <bpmn:endEvent id="End_1" name="Pedido revisado">
      <bpmn:incoming>Flow_2</bpmn:incoming>
    </bpmn:endEvent>
    <bpmn:sequenceFlow id="Flow_1" sourceRef="Start_1" targetRef="Task_1" />
    <bpmn:sequenceFlow id="Flow_2" sourceRef="Task_1" targetRef="End_1" />
  </bpmn:process>
"""

BROKEN_PROCESS = """
  <bpmn:process id="Process_1" isExecutable="false">
    <bpmn:task id="Task_1" />
  </bpmn:process>
"""


@pytest.fixture
def valid_xml() -> str:
    """Proceso mínimo sin issues con el conjunto recommended."""
    return make_definitions(
        VALID_PROCESS,
        make_diagram("Start_1", "Task_1", "End_1", "Flow_1", "Flow_2"),
    )


@pytest.fixture
def broken_xml() -> str:
    """
    Proceso con una tarea suelta y sin diagrama.

    Con recommended produce 7 issues: end-event-required y
    start-event-required sobre Process_1; label-required, no-bpmndi,
    no-disconnected, no-implicit-end y no-implicit-start sobre Task_1.
    """
    return make_definitions(BROKEN_PROCESS)
