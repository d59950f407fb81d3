"""Tests for the flask CLI commands."""


class TestSendTestEmail:

    def test_sends_to_contact_address(self, app, outbox):
        runner = app.test_cli_runner()
        result = runner.invoke(args=["send-test-email"])
        assert result.exit_code == 0
        assert "Test email sent to owner@example.com" in result.output
        assert len(outbox.sent) == 1
        assert outbox.sent[0].recipient == "owner@example.com"

    def test_explicit_recipient(self, app, outbox):
        runner = app.test_cli_runner()
        result = runner.invoke(args=["send-test-email", "--to", "ops@example.com"])
        assert result.exit_code == 0
        assert outbox.sent[0].recipient == "ops@example.com"

    def test_reports_relay_error(self, app, outbox):
        outbox.error = "535 authentication failed"
        runner = app.test_cli_runner()
        result = runner.invoke(args=["send-test-email"])
        assert "ERROR: 535 authentication failed" in result.output
        assert outbox.sent == []
