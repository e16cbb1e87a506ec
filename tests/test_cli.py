import json

import pytest

from codec_config.cli import main


def _write(path, tree):
    path.write_text(json.dumps(tree), encoding="utf-8")


def test_show(tmp_path, capsys):
    path = tmp_path / "g.json"
    _write(path, {"version": 1, "message": "hi"})

    assert main(["show", str(path)]) == 0
    assert json.loads(capsys.readouterr().out) == {"version": 1, "message": "hi"}


def test_check_reports_outdated(tmp_path, capsys):
    path = tmp_path / "g.json"
    _write(path, {"version": 1, "message": "hi"})

    assert main(["check", str(path), "--codec", "variants:CODEC"]) == 0
    assert "version 1 (outdated)" in capsys.readouterr().out


def test_check_reports_current(tmp_path, capsys):
    path = tmp_path / "g.json"
    _write(path, {"version": 3})

    assert main(["check", str(path), "--codec", "variants:CODEC"]) == 0
    assert "version 3 (up to date)" in capsys.readouterr().out


def test_check_fails_on_bad_file(tmp_path, capsys):
    path = tmp_path / "g.json"
    _write(path, {"version": 0})

    assert main(["check", str(path), "--codec", "variants:CODEC"]) == 1
    assert "outside of range [1:3]" in capsys.readouterr().err


def test_check_uses_format_setting(tmp_path, capsys, monkeypatch):
    monkeypatch.setenv("CODEC_CONFIG_FILE_FORMAT", "yaml")
    path = tmp_path / "g.cfg"
    path.write_text("version: 1\nmessage: hi\n", encoding="utf-8")

    assert main(["check", str(path), "--codec", "variants:CODEC"]) == 0
    assert "version 1 (outdated)" in capsys.readouterr().out


def test_check_fails_on_invalid_format_setting(tmp_path, capsys, monkeypatch):
    monkeypatch.setenv("CODEC_CONFIG_FILE_FORMAT", "ini")
    path = tmp_path / "g.json"
    _write(path, {"version": 3})

    assert main(["check", str(path), "--codec", "variants:CODEC"]) == 1
    assert "Invalid codec_config settings" in capsys.readouterr().err


def test_init_creates_and_migrates(tmp_path, capsys):
    args = ["--codec", "variants:CODEC", "--default", "variants:DEFAULT", "--config-dir", str(tmp_path)]

    assert main(["init", "g.json", *args]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["greeting"] == "hello"
    assert json.loads((tmp_path / "g.json").read_text())["version"] == 3

    _write(tmp_path / "old.json", {"version": 1, "message": "hey"})
    assert main(["init", "old.json", *args]) == 0
    assert json.loads((tmp_path / "old.json").read_text())["greeting"] == "hey"


def test_init_no_write(tmp_path, capsys):
    args = ["--codec", "variants:CODEC", "--default", "variants:DEFAULT", "--config-dir", str(tmp_path)]
    assert main(["init", "g.json", "--no-write", *args]) == 0
    assert not (tmp_path / "g.json").exists()


def test_init_exit_code_on_errors(tmp_path, capsys):
    (tmp_path / "g.json").write_text("{broken", encoding="utf-8")
    args = ["--codec", "variants:CODEC", "--default", "variants:DEFAULT", "--config-dir", str(tmp_path)]
    assert main(["init", "g.json", *args]) == 1
    assert "IO exception while trying to read config" in capsys.readouterr().err


@pytest.mark.parametrize("ref", ["variants", "variants:MISSING", "no_such_module:X"])
def test_bad_codec_reference(tmp_path, ref):
    with pytest.raises(SystemExit) as exc:
        main(["check", str(tmp_path / "g.json"), "--codec", ref])
    assert exc.value.code == 2
