from pathlib import Path

import pytest

from convert_md import __version__
from convert_md import cli
from convert_md.errors import CaptureError


@pytest.fixture(autouse=True)
def _deps_ok(monkeypatch):
    monkeypatch.setattr(cli, "check_dependencies", lambda: True)


def _exit_code(argv) -> int:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(argv)
    return excinfo.value.code


def test_help_lists_formats(capsys) -> None:
    assert _exit_code(["--help"]) == 0
    out = capsys.readouterr().out
    assert "usage: convert-md" in out
    for fmt in ("html", "pdf", "both"):
        assert fmt in out


def test_short_help_flag(capsys) -> None:
    assert _exit_code(["-h"]) == 0
    assert "usage:" in capsys.readouterr().out


@pytest.mark.parametrize("flag", ["--version", "-v"])
def test_version(flag: str, capsys) -> None:
    assert _exit_code([flag]) == 0
    assert f"convert-md version {__version__}" in capsys.readouterr().out


def test_unknown_format(capsys) -> None:
    assert _exit_code(["unknown"]) == 2
    assert "Error" in capsys.readouterr().err


def test_unknown_option(capsys) -> None:
    assert _exit_code(["--invalid"]) == 2
    assert "Error" in capsys.readouterr().err


def test_invalid_margins(capsys) -> None:
    assert _exit_code(["html", "--margins", "5in"]) == 2
    assert "Margin too large" in capsys.readouterr().err


def test_negative_timeout(capsys) -> None:
    assert _exit_code(["pdf", "--timeout", "-1"]) == 2
    assert "Error" in capsys.readouterr().err


def test_html_conversion(simple_md: Path, tmp_path: Path, capsys) -> None:
    output = tmp_path / "cli-simple.html"

    cli.main(["html", str(simple_md), str(output)])

    out = capsys.readouterr().out
    assert "HTML file created" in out
    assert "Conversion complete!" in out
    html = output.read_text(encoding="utf-8")
    assert "<!DOCTYPE html>" in html
    assert "Simple Test" in html


def test_html_conversion_with_mermaid(mermaid_md: Path, tmp_path: Path) -> None:
    output = tmp_path / "cli-mermaid.html"
    cli.main(["html", str(mermaid_md), str(output)])
    assert '<pre class="mermaid">' in output.read_text(encoding="utf-8")


def test_relative_input_and_default_output(simple_md: Path, tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    cli.main(["html", "simple.md"])
    assert (tmp_path / "simple.html").is_file()


def test_default_input_file(write_md, tmp_path: Path, monkeypatch) -> None:
    write_md("CODE_SUMMARY.md", "# Summary\n")
    monkeypatch.chdir(tmp_path)
    cli.main(["html"])
    assert "<title>CODE_SUMMARY</title>" in (tmp_path / "CODE_SUMMARY.html").read_text(encoding="utf-8")


def test_missing_input_file(tmp_path: Path, monkeypatch, capsys) -> None:
    monkeypatch.chdir(tmp_path)
    assert _exit_code(["html", "nonexistent.md"]) == 1
    err = capsys.readouterr().err
    assert "Input file not found: nonexistent.md" in err
    assert err.count("Error:") == 1
    assert "[ERROR]" not in err
    assert not (tmp_path / "nonexistent.html").exists()


def test_pdf_uses_explicit_output(simple_md: Path, tmp_path: Path, monkeypatch) -> None:
    calls = []
    monkeypatch.setattr("convert_md.pdf.convert_to_pdf", lambda src, out, config: calls.append((src, out)))

    cli.main(["pdf", str(simple_md), str(tmp_path / "custom.pdf")])

    assert calls == [(simple_md, tmp_path / "custom.pdf")]


def test_both_ignores_explicit_output(simple_md: Path, tmp_path: Path, monkeypatch) -> None:
    calls = []
    monkeypatch.setattr("convert_md.pdf.convert_to_pdf", lambda src, out, config: calls.append(out))
    monkeypatch.chdir(tmp_path)

    cli.main(["both", str(simple_md), "ignored.out"])

    assert (tmp_path / "simple.html").is_file()
    assert calls == [Path("simple.pdf")]
    assert not (tmp_path / "ignored.out").exists()


def test_both_keeps_html_when_pdf_fails(simple_md: Path, tmp_path: Path, monkeypatch, capsys) -> None:
    def _fail(src, out, config):
        raise CaptureError("browser crashed")

    monkeypatch.setattr("convert_md.pdf.convert_to_pdf", _fail)
    monkeypatch.chdir(tmp_path)

    assert _exit_code(["both", str(simple_md)]) == 1
    assert (tmp_path / "simple.html").is_file()
    assert "browser crashed" in capsys.readouterr().err


def test_pdf_fails_when_dependencies_missing(simple_md: Path, tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setattr(cli, "check_dependencies", lambda: False)
    monkeypatch.chdir(tmp_path)
    assert _exit_code(["pdf", str(simple_md)]) == 1


def test_options_reach_config(simple_md: Path, tmp_path: Path, monkeypatch) -> None:
    seen = {}

    def _capture(src, out, config):
        seen["margins"] = config.get_page_margins()
        seen["timeout"] = config.get_render_timeout_ms()

    monkeypatch.setattr("convert_md.pdf.convert_to_pdf", _capture)
    monkeypatch.chdir(tmp_path)

    cli.main(["pdf", str(simple_md), "--margins", "10mm", "--timeout", "9000"])

    assert seen["margins"]["left"] == "10mm"
    assert seen["timeout"] == 9000


@pytest.mark.parametrize(
    "fmt, output, expected",
    [
        ("html", "x.html", (Path("x.html"), Path("notes.pdf"))),
        ("pdf", "x.pdf", (Path("notes.html"), Path("x.pdf"))),
        ("both", "x", (Path("notes.html"), Path("notes.pdf"))),
        ("both", None, (Path("notes.html"), Path("notes.pdf"))),
    ],
)
def test_resolve_outputs(fmt, output, expected) -> None:
    assert cli.resolve_outputs(fmt, Path("docs/notes.md"), output) == expected
