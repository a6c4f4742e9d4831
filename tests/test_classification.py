import pytest

from bpmn_lint_core.classification import ClassificationTable, parse_pairs
from bpmn_lint_core.config import Settings
from bpmn_lint_core.errors import LintConfigError


def test_default_table():
    table = ClassificationTable()
    assert dict(table.category_map) == {"error": "error", "warn": "warning", "info": "info"}
    assert table.default_severity == "warning"
    assert table.blocking == frozenset({"error", "rule-error"})
    assert dict(table.rule_overrides) == {}


def test_from_settings_parses_overrides_and_blocking_set():
    settings = Settings(
        severity_overrides="label-required=info, no-bpmndi = WARNING",
        severity_default="info",
        blocking_set="error, rule-error, warning",
    )

    table = ClassificationTable.from_settings(settings)

    assert dict(table.rule_overrides) == {"label-required": "info", "no-bpmndi": "warning"}
    assert table.default_severity == "info"
    assert table.blocking == frozenset({"error", "rule-error", "warning"})


def test_empty_blocking_set_falls_back_to_default():
    table = ClassificationTable.from_settings(Settings(blocking_set=" , "))
    assert table.blocking == frozenset({"error", "rule-error"})


def test_table_is_read_only():
    table = ClassificationTable(rule_overrides={"a": "info"})
    with pytest.raises(TypeError):
        table.rule_overrides["a"] = "error"  # type: ignore[index]


@pytest.mark.parametrize(
    "kwargs",
    [
        {"rule_overrides": {"label-required": "fatal"}},
        {"default_severity": "warn"},
        {"category_map": {"error": "blocker"}},
    ],
)
def test_invalid_severities_are_rejected(kwargs):
    with pytest.raises(LintConfigError):
        ClassificationTable(**kwargs)


def test_parse_pairs_rejects_entries_without_equals():
    with pytest.raises(LintConfigError):
        parse_pairs("label-required")
