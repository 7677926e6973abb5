"""Unit tests for dspal.core.diagnostics."""

from dspal.core.diagnostics import Diagnostic, DiagnosticLog


class TestDiagnosticLog:
    """Tests for DiagnosticLog collection and callbacks."""

    def test_empty_log_is_falsy(self):
        assert not DiagnosticLog()
        assert len(DiagnosticLog()) == 0

    def test_records_in_order(self):
        log = DiagnosticLog()
        log.warn("PLTT", "first")
        log.warn("PCMP", "second", 0x20)
        assert [d.message for d in log] == ["first", "second"]

    def test_callback_receives_each_record(self):
        seen = []
        log = DiagnosticLog(callback=seen.append)
        diag = log.warn("PLTT", "size mismatch", 0x18)
        assert seen == [diag]

    def test_for_block(self):
        log = DiagnosticLog()
        log.warn("PLTT", "a")
        log.warn("PCMP", "b")
        assert [d.message for d in log.for_block("PCMP")] == ["b"]

    def test_records_returns_copy(self):
        log = DiagnosticLog()
        log.warn("PLTT", "a")
        log.records.clear()
        assert len(log) == 1


class TestDiagnosticStr:
    """Tests for Diagnostic formatting."""

    def test_with_offset(self):
        assert str(Diagnostic("PLTT", "odd", 0x1C)) == "PLTT @ 0x1C: odd"

    def test_without_offset(self):
        assert str(Diagnostic("PCMP", "odd")) == "PCMP: odd"
