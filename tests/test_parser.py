import pytest

from bpmn_lint_core.bpmn.parser import MAX_NESTING_DEPTH, BpmnParser, parse_bpmn
from bpmn_lint_core.errors import BpmnParseError, EmptyDocumentError, InvalidRootElementError

from conftest import make_definitions


def test_parse_valid_document(valid_xml):
    doc = parse_bpmn(valid_xml)

    assert doc.root_element.type == "bpmn:Definitions"
    assert doc.root_element.id == "Definitions_1"
    assert [e.type for e in doc.root_elements] == ["bpmn:Process"]
    assert doc.root_elements[0].id == "Process_1"


def test_sequence_flows_are_resolved(valid_xml):
    doc = parse_bpmn(valid_xml)
    task = doc.elements_by_id["Task_1"]
    flow = doc.elements_by_id["Flow_1"]

    assert flow.source is doc.elements_by_id["Start_1"]
    assert flow.target is task
    assert [f.id for f in task.incoming] == ["Flow_1"]
    assert [f.id for f in task.outgoing] == ["Flow_2"]


def test_reference_tags_and_vendor_extensions_are_not_elements(valid_xml):
    task = parse_bpmn(valid_xml).elements_by_id["Task_1"]

    assert [child.type for child in task.children] == ["bpmn:ExtensionElements"]
    assert task.children[0].children == []


def test_type_hierarchy(valid_xml):
    doc = parse_bpmn(valid_xml)
    task = doc.elements_by_id["Task_1"]
    start = doc.elements_by_id["Start_1"]

    assert task.is_a("bpmn:Activity")
    assert task.is_a("bpmn:FlowNode")
    assert not task.is_a("bpmn:Event")
    assert start.is_any("bpmn:Gateway", "bpmn:CatchEvent")
    assert doc.root_elements[0].is_a("bpmn:FlowElementsContainer")


def test_root_elements_exclude_diagram_and_keep_document_order():
    xml = make_definitions(
        """
        <bpmn:collaboration id="Collab_1">
          <bpmn:participant id="Participant_1" name="Cliente" processRef="Process_1" />
        </bpmn:collaboration>
        <bpmn:message id="Message_1" name="Pedido" />
        <bpmn:process id="Process_1" />
        """,
        '<bpmndi:BPMNDiagram id="Diagram_1" />',
    )

    doc = BpmnParser().parse(xml)

    assert [e.id for e in doc.root_elements] == ["Collab_1", "Message_1", "Process_1"]


def test_condition_expression_and_root_walk():
    xml = make_definitions(
        """
        <bpmn:process id="Process_1">
          <bpmn:sequenceFlow id="Flow_1" sourceRef="A" targetRef="B">
            <bpmn:conditionExpression xsi:type="bpmn:tFormalExpression"
              xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance">${ok}</bpmn:conditionExpression>
          </bpmn:sequenceFlow>
        </bpmn:process>
        """
    )
    flow = parse_bpmn(xml).elements_by_id["Flow_1"]

    assert flow.condition_expression is not None
    assert flow.condition_expression.text == "${ok}"
    assert flow.source is None
    assert flow.root.type == "bpmn:Definitions"


def test_malformed_xml():
    with pytest.raises(BpmnParseError):
        parse_bpmn("<bpmn:definitions><unclosed></bpmn:definitions>")


@pytest.mark.parametrize("text", ["", "   \n  "])
def test_empty_document(text):
    with pytest.raises(EmptyDocumentError):
        parse_bpmn(text)


def test_wrong_root_element():
    xml = (
        '<bpmn:process xmlns:bpmn="http://www.omg.org/spec/BPMN/20100524/MODEL" id="Process_1" />'
    )
    with pytest.raises(InvalidRootElementError, match="bpmn:Process"):
        parse_bpmn(xml)


def test_non_bpmn_root():
    with pytest.raises(InvalidRootElementError):
        parse_bpmn("<html><body>hola</body></html>")


def test_doctype_is_rejected():
    xml = '<?xml version="1.0"?><!DOCTYPE lolz [<!ENTITY lol "lol">]><lolz>&lol;</lolz>'
    with pytest.raises(BpmnParseError):
        parse_bpmn(xml)


def nested_sub_processes(depth):
    return make_definitions(
        '<bpmn:process id="Process_1">'
        + "".join(f'<bpmn:subProcess id="Sub_{n}">' for n in range(depth))
        + "</bpmn:subProcess>" * depth
        + "</bpmn:process>"
    )


def test_nesting_limit():
    doc = parse_bpmn(nested_sub_processes(100))
    assert doc.elements_by_id["Sub_99"].parent.id == "Sub_98"
    assert len(list(doc.root_element.walk())) == 102

    with pytest.raises(BpmnParseError, match="anidamiento"):
        parse_bpmn(nested_sub_processes(MAX_NESTING_DEPTH))
