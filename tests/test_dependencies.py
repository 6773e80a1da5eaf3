from convert_md import dependencies


def test_installed_dependencies_pass() -> None:
    assert dependencies.check_dependencies()


def test_missing_dependency_prints_hint(monkeypatch, capsys) -> None:
    monkeypatch.setattr(
        dependencies,
        "REQUIRED_MODULES",
        {"markdown": "Python-Markdown", "convert_md_no_such_module": "Imaginary Browser"},
    )
    assert not dependencies.check_dependencies()
    err = capsys.readouterr().err
    assert "Imaginary Browser is not available" in err
    assert "python -m playwright install chromium" in err
