"""Tests for 'symscope lookup' command."""

import json
import textwrap

import pytest
from click.testing import CliRunner

from symscope import __version__
from symscope.cli.main import main

SNAPSHOT = textwrap.dedent(
    """\
    name: greeter
    modules:
      - name: app
        libraries: ["jar:///libs/greeter.jar!/"]
    roots:
      - url: file:///ws/app/src
        label: app/src
        module: app
        files:
          demo/Greeter.java:
            text: |
              package demo;

              public class Greeter {
                  int greet(int n) {
                      if (n > 0) {
                          return n;
                      }
                      return 0;
                  }
              }
          app.yml: {text: "greeting: hi\\n"}
      - url: jar:///libs/greeter.jar!/
        label: greeter.jar
        files:
          demo/Greeter.class: {text: "public class Greeter { int greet(int n) { /* compiled code */ } }", compiled: true}
    classes:
      - name: demo.Greeter
        file: file:///ws/app/src/demo/Greeter.java
        lines: [3, 10]
        methods:
          - {name: greet, params: [int], lines: [4, 9]}
      - name: demo.Greeter
        file: jar:///libs/greeter.jar!/demo/Greeter.class
    """
)


@pytest.fixture
def snapshot(tmp_path) -> str:
    path = tmp_path / "greeter.yaml"
    path.write_text(SNAPSHOT, encoding="utf-8")
    return str(path)


def _json(result) -> dict:
    return json.loads(result.output)


class TestLookupHuman:
    """Tests for the rich output of 'symscope lookup'."""

    def test_class_with_alternatives(self, snapshot) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["lookup", snapshot, "Greeter", "--module", "app"])

        assert result.exit_code == 0
        assert "OK" in result.output
        assert "Resolved class" in result.output
        assert "Alternatives:" in result.output
        assert "DECOMPILED" in result.output

    def test_not_found_exits_1(self, snapshot) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["lookup", snapshot, "demo.Missing"])

        assert result.exit_code == 1
        assert "NOT_FOUND" in result.output

    def test_missing_snapshot_reports_error_id(self, tmp_path) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["lookup", str(tmp_path / "absent.yaml"), "Greeter"])

        assert result.exit_code == 1
        assert "SY-7003" in result.output


class TestLookupJson:
    """Tests for 'symscope lookup --json'."""

    def test_method_with_param(self, snapshot) -> None:
        runner = CliRunner()
        result = runner.invoke(
            main, ["lookup", snapshot, "Greeter", "--method", "greet", "--param", "int", "--module", "app", "--json"]
        )

        assert result.exit_code == 0
        payload = _json(result)
        assert payload["kind"] == "METHOD"
        assert payload["symbolKey"] == "demo.Greeter#greet"
        assert payload["sourceText"].startswith("int greet(int n) {")
        assert (payload["startLine"], payload["endLine"]) == (4, 9)

    def test_depth_truncates(self, snapshot) -> None:
        runner = CliRunner()
        result = runner.invoke(
            main, ["lookup", snapshot, "Greeter", "--method", "greet", "--module", "app", "--depth", "1", "--json"]
        )

        text = _json(result)["sourceText"]
        assert "return n;" not in text
        assert "..." in text

    def test_line_range(self, snapshot) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["lookup", snapshot, "demo.Greeter", "--module", "app", "--lines", "4-5", "--json"])

        payload = _json(result)
        assert payload["sourceText"] == "    int greet(int n) {\n        if (n > 0) {"
        assert payload["uri"].endswith("#L4-L5")

    def test_single_line(self, snapshot) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["lookup", snapshot, "demo.Greeter", "--module", "app", "--lines", "3", "--json"])

        assert _json(result)["sourceText"] == "public class Greeter {"

    def test_bad_line_range_is_usage_error(self, snapshot) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["lookup", snapshot, "Greeter", "--lines", "four"])

        assert result.exit_code == 2
        assert "expected A-B" in result.output

    def test_resource(self, snapshot) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["lookup", snapshot, "app.yml", "--json"])

        payload = _json(result)
        assert payload["kind"] == "RESOURCE"
        assert payload["sourceText"] == "greeting: hi\n"

    def test_no_resources_flag(self, snapshot) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["lookup", snapshot, "app.yml", "--no-resources", "--json"])

        assert result.exit_code == 1
        assert _json(result)["status"] == "NOT_FOUND"

    def test_missing_snapshot_as_json(self, tmp_path) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["lookup", str(tmp_path / "absent.yaml"), "Greeter", "--json"])

        assert result.exit_code == 1
        error = _json(result)
        assert error["error_id"] == "SY-7003"
        assert error["category"] == "io"


def test_version() -> None:
    runner = CliRunner()
    result = runner.invoke(main, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output
