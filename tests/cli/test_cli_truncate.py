"""Tests for 'symscope truncate' command."""

from click.testing import CliRunner

from symscope.cli.truncate_cmd import truncate

SOURCE = "class A { void m() { if (x) { y(); } } }"


class TestTruncate:
    """Tests for the truncate command."""

    def test_file_argument(self, tmp_path) -> None:
        path = tmp_path / "A.java"
        path.write_text(SOURCE, encoding="utf-8")

        runner = CliRunner()
        result = runner.invoke(truncate, [str(path), "--depth", "1"])

        assert result.exit_code == 0
        assert result.output == "class A { void m() {\n        ...\n} }"

    def test_stdin(self) -> None:
        runner = CliRunner()
        result = runner.invoke(truncate, ["-", "-d", "0"], input="{ a { b } }")

        assert result.exit_code == 0
        assert result.output == "{\n    ...\n}"

    def test_indent_option(self) -> None:
        runner = CliRunner()
        result = runner.invoke(truncate, ["-", "-d", "1", "--indent", "2"], input=SOURCE)

        assert "\n    ...\n" in result.output
        assert "\n        ...\n" not in result.output

    def test_indent_from_config(self, monkeypatch) -> None:
        monkeypatch.setenv("SYMSCOPE_LOOKUP_INDENT_WIDTH", "1")

        runner = CliRunner()
        result = runner.invoke(truncate, ["-", "-d", "1"], input=SOURCE)

        assert result.output == "class A { void m() {\n  ...\n} }"

    def test_shallow_text_unchanged(self) -> None:
        runner = CliRunner()
        result = runner.invoke(truncate, ["-", "-d", "5", "--stats"], input=SOURCE)

        assert result.exit_code == 0
        assert "max depth 3, kept 5, unchanged" in result.output
        assert result.output.endswith(SOURCE)

    def test_stats_reports_truncation(self) -> None:
        runner = CliRunner()
        result = runner.invoke(truncate, ["-", "-d", "1", "--stats"], input=SOURCE)

        assert "max depth 3, kept 1, truncated" in result.output

    def test_depth_is_required(self) -> None:
        runner = CliRunner()
        result = runner.invoke(truncate, ["-"], input=SOURCE)

        assert result.exit_code == 2

    def test_negative_depth_rejected(self) -> None:
        runner = CliRunner()
        result = runner.invoke(truncate, ["-", "--depth", "-1"], input=SOURCE)

        assert result.exit_code == 2
