import io

from hylo_intgen.errors import ERR, ConstructionError, WriteError
from hylo_intgen.report import Reporter


def test_plain_format_includes_code_and_subject(tmp_path):
    reporter = Reporter()
    reporter.exception(WriteError("Int8", tmp_path / "Int8.hylo", "Permission denied"), "Int8")
    text = reporter.format(use_color=False)
    assert text.startswith("hylo-intgen: Int8: error [GE0201]: failed to write Int8 to ")
    assert text.endswith("Permission denied.")
    assert reporter.has_errors


def test_print_without_tty_has_no_ansi(tmp_path):
    reporter = Reporter()
    reporter.exception(ConstructionError(ERR.GE0101, tmp_path / "missing"))
    stream = io.StringIO()
    reporter.print(stream)
    out = stream.getvalue()
    assert "\x1b[" not in out
    assert "[GE0101]" in out


def test_nothing_printed_without_diagnostics():
    stream = io.StringIO()
    Reporter().print(stream)
    assert stream.getvalue() == ""


def test_color_format_marks_errors_in_red(tmp_path):
    reporter = Reporter()
    reporter.exception(ConstructionError(ERR.GE0102, tmp_path))
    text = reporter.format(use_color=True)
    assert "\x1b[1m\x1b[31merror\x1b[0m" in text
    assert "GE0102" in text
