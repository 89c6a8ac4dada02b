"""Tests for cli.py - the command line entry point"""

import sys
import os
import json
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from kyoku_builder import raw_kyoku, raw_log

from convlog import cli


def write_log(tmp_path, *entries):
    path = tmp_path / "tenhou.json"
    path.write_text(json.dumps(raw_log(*entries), ensure_ascii=False), encoding="utf-8")
    return str(path)


def ok_entry(kyoku_num=0):
    return raw_kyoku(takes=[[11], [], [], []], discards=[[21], [], [], []],
                     kyoku_num=kyoku_num)


def broken_entry(kyoku_num=1):
    return raw_kyoku(takes=[[11], [], [13], []], discards=[[21], [], [22], []],
                     kyoku_num=kyoku_num)


class TestMain:
    def test_convert_to_file(self, tmp_path):
        src = write_log(tmp_path, ok_entry())
        out = tmp_path / "out.mjson"
        assert cli.main([src, "-o", str(out)]) == 0
        lines = out.read_text(encoding="utf-8").splitlines()
        assert json.loads(lines[0])["type"] == "start_game"
        assert json.loads(lines[-1])["type"] == "end_game"

    def test_convert_to_stdout(self, tmp_path, capsys):
        src = write_log(tmp_path, ok_entry())
        assert cli.main([src]) == 0
        out = capsys.readouterr().out.splitlines()
        assert [json.loads(l)["type"] for l in out][:2] == ["start_game", "start_kyoku"]

    def test_missing_file(self, tmp_path):
        assert cli.main([str(tmp_path / "missing.json")]) == 1

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        assert cli.main([str(path)]) == 1

    def test_conversion_error(self, tmp_path):
        src = write_log(tmp_path, ok_entry(0), broken_entry(1))
        out = tmp_path / "out.mjson"
        assert cli.main([src, "-o", str(out)]) == 1
        assert not out.exists()

    def test_skip_errors_with_summary(self, tmp_path, capsys):
        src = write_log(tmp_path, ok_entry(0), broken_entry(1))
        out = tmp_path / "out.mjson"
        assert cli.main([src, "-o", str(out), "--skip-errors", "--summary"]) == 0
        types = [json.loads(l)["type"] for l in out.read_text(encoding="utf-8").splitlines()]
        assert types.count("start_kyoku") == 1
        assert "E1" in capsys.readouterr().err

    def test_input_not_utf8(self, tmp_path):
        path = tmp_path / "latin1.json"
        path.write_bytes(b'{"log": ["\xff"]}')
        assert cli.main([str(path)]) == 1

    def test_unwritable_output(self, tmp_path):
        src = write_log(tmp_path, ok_entry())
        out = tmp_path / "no_such_dir" / "out.mjson"
        assert cli.main([src, "-o", str(out)]) == 1

    def test_malformed_table_is_reported(self, tmp_path):
        entry = ok_entry()
        entry[5] = 11
        src = write_log(tmp_path, entry)
        assert cli.main([src]) == 1
