"""Tests for operation-specific Rich renderers."""

from trackctl.output.renderers import render_quiet, render_result
from trackctl.services.result import ServiceError, ServiceResult

# ── Helpers ───────────────────────────────────────────────────────────

T1 = "2024-01-01 09:00:00 UTC"
T2 = "2024-01-01 10:30:00 UTC"


def _ok(op: str, **data: object) -> ServiceResult:
    return ServiceResult(ok=True, op=op, data=dict(data))


def _err(op: str, code: str, message: str, **detail: object) -> ServiceResult:
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=code, message=message, detail=dict(detail)),
    )


# ── Error rendering ──────────────────────────────────────────────────


class TestErrorRenderer:
    def test_basic_error(self) -> None:
        output = render_result(_err("end", "NO_OPEN_INTERVAL", "no incomplete entry to end"))
        assert "ERROR" in output
        assert "end" in output
        assert "no incomplete entry to end" in output

    def test_verbose_shows_detail(self) -> None:
        result = _err("total", "STRUCTURAL_FORMAT", "bad", bad_lines=[2, 5])
        output = render_result(result, verbose=True)
        assert "detail" in output
        assert "bad_lines" in output
        assert "[2, 5]" in output

    def test_detail_hidden_without_verbose(self) -> None:
        result = _err("total", "STRUCTURAL_FORMAT", "bad", bad_lines=[2])
        assert "bad_lines" not in render_result(result)

    def test_no_error_object(self) -> None:
        assert "Unknown error" in render_result(ServiceResult(ok=False, op="begin"))


# ── Mutations ────────────────────────────────────────────────────────


class TestMutationRenderer:
    def test_begin_announces(self) -> None:
        assert render_result(_ok("begin", start=T1)) == "BEGIN"

    def test_end_announces(self) -> None:
        output = render_result(_ok("end", start=T1, end=T2, elapsed="1h30m0s", seconds=5400))
        assert output == "END"

    def test_fork_announces(self) -> None:
        assert render_result(_ok("fork", start=T1, pid=7)) == "FORK"

    def test_verbose_shows_fields(self) -> None:
        result = ServiceResult(
            ok=True,
            op="end",
            data={"start": T1, "end": T2, "elapsed": "1h30m0s"},
            meta={"path": "/tmp/TIMES.csv"},
        )
        output = render_result(result, verbose=True)
        assert output.startswith("END")
        assert "1h30m0s" in output
        assert "/tmp/TIMES.csv" in output


# ── Reports ──────────────────────────────────────────────────────────


class TestReportRenderers:
    def test_total(self) -> None:
        assert render_result(_ok("total", total="2h15m0s", seconds=8100, intervals=2)) == "2h15m0s"

    def test_total_verbose(self) -> None:
        result = _ok("total", total="2h15m0s", seconds=8100, intervals=2)
        output = render_result(result, verbose=True)
        assert "intervals: 2" in output
        assert "seconds: 8100" in output

    def test_list_table(self) -> None:
        items = [
            {"line": 1, "start": T1, "end": T2, "elapsed": "1h30m0s", "seconds": 5400},
            {"line": 2, "start": T2, "end": "open", "elapsed": "5m0s", "seconds": 300},
        ]
        output = render_result(_ok("list", items=items, count=2))
        assert "Start" in output
        assert T1 in output
        assert "open" in output
        assert "2 intervals" in output
        assert "Line" not in output

    def test_list_verbose_shows_line(self) -> None:
        items = [{"line": 4, "start": T1, "end": T2, "elapsed": "1h30m0s", "seconds": 5400}]
        assert "Line" in render_result(_ok("list", items=items, count=1), verbose=True)

    def test_status_open(self) -> None:
        result = _ok(
            "status",
            state="open",
            since=T2,
            running="10m0s",
            intervals=1,
            total="1h30m0s",
            seconds=5400,
        )
        output = render_result(result)
        assert output.startswith(f"OPEN since {T2}")
        assert "running: 10m0s" in output
        assert "total: 1h30m0s" in output

    def test_status_empty(self) -> None:
        output = render_result(_ok("status", state="empty", intervals=0, total="0s", seconds=0))
        assert output.startswith("EMPTY")

    def test_verify_generic(self) -> None:
        output = render_result(_ok("verify", records=3, closed=3, open=False))
        assert "OK" in output
        assert "records: 3" in output


# ── Quiet mode ───────────────────────────────────────────────────────


class TestQuiet:
    def test_mutations_silent(self) -> None:
        assert render_quiet(_ok("begin", start=T1)) == ""
        assert render_quiet(_ok("end", start=T1, end=T2)) == ""

    def test_total_value_only(self) -> None:
        assert render_quiet(_ok("total", total="1h0m0s")) == "1h0m0s"

    def test_status_state_only(self) -> None:
        assert render_quiet(_ok("status", state="closed")) == "closed"

    def test_list_as_csv(self) -> None:
        items = [{"start": T1, "end": T2}, {"start": T2, "end": "open"}]
        assert render_quiet(_ok("list", items=items)) == f"{T1},{T2}\n{T2},open"

    def test_error(self) -> None:
        output = render_quiet(_err("end", "NO_OPEN_INTERVAL", "no incomplete entry to end"))
        assert output == "ERROR: end — no incomplete entry to end"

    def test_other_ops(self) -> None:
        assert render_quiet(_ok("verify", records=0)) == "OK: verify"


class TestErrorLine:
    def test_matches_quiet_format(self) -> None:
        result = _err("begin", "STRUCTURAL_FORMAT", "last entry is incomplete")
        assert render_result(result) == render_quiet(result)
