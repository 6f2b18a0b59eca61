from types import MappingProxyType

import pytest

from console_ui import ConsoleUI
from impact_report import render_impact_report, top_extensions
from tree_scanner import ScanResult


@pytest.fixture(autouse=True)
def wide_console(monkeypatch):
    monkeypatch.setenv("COLUMNS", "200")


def test_top_extensions_orders_by_count():
    types = {".txt": 2, ".log": 5, ".py": 3}

    assert top_extensions(types, 2) == [(".log", 5), (".py", 3)]


def test_top_extensions_ties_keep_mapping_order():
    types = {".b": 1, ".a": 1, ".c": 4, ".d": 1}

    assert top_extensions(types) == [(".c", 4), (".b", 1), (".a", 1), (".d", 1)]


def test_top_extensions_limit():
    types = {f".e{i}": i for i in range(1, 15)}

    ranked = top_extensions(types)

    assert len(ranked) == 10
    assert ranked[0] == (".e14", 14)
    assert top_extensions(types, 0) == []


def test_render_report(capsys):
    result = ScanResult(
        root_path="/data",
        total_files=3,
        total_directories=1,
        total_size=35,
        largest_file_size=20,
        largest_file_path="/data/b.txt",
        file_types=MappingProxyType({".txt": 2, "[no extension]": 1}),
    )

    render_impact_report(ConsoleUI(no_color=True), result)

    out = capsys.readouterr().out
    assert "Files" in out
    assert "35 B" in out
    assert "/data/b.txt" in out
    assert "[no extension]" in out
    assert "66.7%" in out


def test_render_report_mentions_incomplete_data(capsys):
    result = ScanResult(root_path="/data", unmeasured_files=2, inaccessible_entries=1)

    render_impact_report(ConsoleUI(no_color=True), result)

    out = capsys.readouterr().out
    assert "Unmeasured files" in out
    assert "could not be read" in out


def test_render_report_interrupted(capsys):
    result = ScanResult(root_path="/data", interrupted=True)

    render_impact_report(ConsoleUI(no_color=True), result)

    assert "interrupted" in capsys.readouterr().out


def test_render_report_omits_largest_file_when_all_empty(capsys):
    result = ScanResult(
        root_path="/data",
        total_files=1,
        file_types=MappingProxyType({".lock": 1}),
    )

    render_impact_report(ConsoleUI(no_color=True), result)

    out = capsys.readouterr().out
    assert "Largest file" not in out
    assert ".lock" in out
