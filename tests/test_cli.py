"""
Tests for the command-line interface.
"""
import json

from cli import main


def _write(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def test_identical_files_exit_zero(tmp_path, capsys):
    first = _write(tmp_path / "a.json", {"id": "a", "v": 1})
    second = _write(tmp_path / "b.json", {"id": "a", "v": 1})

    assert main(["compare", first, second]) == 0
    assert "RESULT: NO DIFFERENCES FOUND" in capsys.readouterr().out


def test_differences_exit_one(tmp_path, capsys):
    first = _write(tmp_path / "a.json", {"v": 1})
    second = _write(tmp_path / "b.json", {"v": 2})

    assert main(["compare", first, second, "--mode", "semantic", "--diff-only"]) == 1
    out = capsys.readouterr().out
    assert "~ v: 1 -> 2" in out
    assert "a.json (a)" in out


def test_json_output(tmp_path, capsys):
    first = _write(tmp_path / "a.json", {"tags": [1, 2]})
    second = _write(tmp_path / "b.json", {"tags": [2, 1]})

    status = main([
        "compare", first, second,
        "--mode", "semantic", "--ignore-array-order", "--format", "json"
    ])
    data = json.loads(capsys.readouterr().out)
    assert status == 0
    assert data["mode"] == "semantic"
    assert data["is_identical"] is True
    assert data["ignore_array_order"] is True


def test_split_arrays(tmp_path, capsys):
    batch = _write(tmp_path / "batch.json", [{"id": "x"}, {"id": "y"}])

    assert main(["compare", batch, "--split-arrays", "--format", "json"]) == 1
    data = json.loads(capsys.readouterr().out)
    assert data["labels"] == ["x", "y"]


def test_missing_file(tmp_path, capsys):
    first = _write(tmp_path / "a.json", {})

    assert main(["compare", first, str(tmp_path / "missing.json")]) == 1
    assert "Error:" in capsys.readouterr().err


def test_no_command(capsys):
    assert main([]) == 1
