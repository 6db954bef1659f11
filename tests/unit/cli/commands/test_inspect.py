"""
Unit tests for the 'inspect' command.
"""

from click.testing import CliRunner

from flowlens.cli.commands.inspect import inspect


class TestInspectCommand:
    def test_vulnerable_node(self, payload_file):
        runner = CliRunner()
        result = runner.invoke(inspect, [str(payload_file), "sink_innerHTML"])

        assert result.exit_code == 0
        assert "DISPLAYING FULL ATTACK PATH" in result.output
        assert "Reflected XSS" in result.output
        assert "onerror=alert(1)" in result.output

    def test_regular_node(self, payload_file):
        runner = CliRunner()
        result = runner.invoke(inspect, [str(payload_file), "var_query"])

        assert result.exit_code == 0
        assert "var query" in result.output
        assert "Logic component identified" in result.output
        assert "ATTACK PATH" not in result.output

    def test_unknown_node(self, payload_file):
        runner = CliRunner()
        result = runner.invoke(inspect, [str(payload_file), "zzz"])
        assert result.exit_code == 1
