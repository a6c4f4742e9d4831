import gzip
import json

import pytest

from bpmn_lint_core.cli import main
from bpmn_lint_core.config import get_settings


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    for var in ("BPMNLINT_CONFIG", "BPMNLINT_RULES", "LINT_SCOPE", "INCLUDE_RAW_REPORTS"):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_valid_file_exits_zero(tmp_path, capsys, valid_xml):
    path = tmp_path / "ok.bpmn"
    path.write_text(valid_xml, encoding="utf-8")

    assert main([str(path)]) == 0
    assert json.loads(capsys.readouterr().out) == {"status": "ok", "issues": []}


def test_blocking_issues_exit_one(tmp_path, capsys, broken_xml):
    path = tmp_path / "broken.bpmn.gz"
    path.write_bytes(gzip.compress(broken_xml.encode("utf-8")))

    assert main([str(path), "--raw", "--scope", "all"]) == 1
    payload = json.loads(capsys.readouterr().out)
    assert payload["status"] == "error"
    assert len(payload["issues"]) == 7
    assert len(payload["rawReports"]["no-bpmndi"]) == 2


def test_env_rules_apply(tmp_path, capsys, monkeypatch, broken_xml):
    monkeypatch.setenv("BPMNLINT_RULES", "label-required=off")
    path = tmp_path / "broken.bpmn"
    path.write_text(broken_xml, encoding="utf-8")

    main([str(path)])

    rules = {issue["rule"] for issue in json.loads(capsys.readouterr().out)["issues"]}
    assert "label-required" not in rules


def test_missing_file_exits_two(tmp_path, capsys):
    assert main([str(tmp_path / "nope.bpmn")]) == 2
    assert "nope.bpmn" in capsys.readouterr().err


def test_unparseable_file_exits_two(tmp_path, capsys):
    path = tmp_path / "bad.bpmn"
    path.write_text("<html></html>", encoding="utf-8")

    assert main([str(path)]) == 2
    assert capsys.readouterr().out == ""
