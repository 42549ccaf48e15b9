"""
Tests for the command line front end.
"""

import io

from bfkit import cli


def test_interpret_file(tmp_path, capsys):
    path = tmp_path / "prog.b"
    path.write_text("++++++++[>++++++++<-]>++.")
    assert cli.main([str(path)]) == 0
    assert capsys.readouterr().out == "B"


def test_dump_cells(tmp_path, capsys):
    path = tmp_path / "prog.b"
    path.write_text("+++>+")
    assert cli.main([str(path), "--dump", "8"]) == 0
    out = capsys.readouterr().out
    assert out.endswith("================\n3 1 0 0 0 0 0 0\n")


def test_print_ast(tmp_path, capsys):
    path = tmp_path / "prog.b"
    path.write_text("+[-]")
    assert cli.main([str(path), "--print-ast"]) == 0
    assert capsys.readouterr().out == "Increment\nLoop\n  Decrement\n"


def test_parse_error_exit_status(tmp_path, capsys):
    path = tmp_path / "prog.b"
    path.write_text("+]")
    assert cli.main([str(path)]) == 1
    assert "Unmatched ']' starting at line: 1, column: 2" in capsys.readouterr().err


def test_missing_file(tmp_path, capsys):
    assert cli.main([str(tmp_path / "nope.b")]) == 1
    assert "Couldn't find file" in capsys.readouterr().err


def test_emit_asm(tmp_path):
    path = tmp_path / "prog.b"
    path.write_text("++")
    assert cli.main([str(path), "-S", "-O", "--target", "linux"]) == 0
    asm = (tmp_path / "prog.asm").read_text()
    assert "add byte [rsp], 2" in asm


def test_compile_calls_toolchain(monkeypatch, tmp_path):
    path = tmp_path / "prog.b"
    path.write_text("+.")
    seen = {}

    def _fake_build(source, output, options=None, keep_temps=False):
        seen.update(source=source, output=output, options=options)
        return output

    monkeypatch.setattr(cli, 'build_executable', _fake_build)
    assert cli.main([str(path), "-c", "--target", "macos"]) == 0
    assert seen['output'] == tmp_path / "prog"
    assert seen['options'].target == 'macos'
    assert seen['source'] == b"+."


def test_repl_mode(monkeypatch, capsys):
    monkeypatch.setattr('sys.stdin', io.StringIO("+++.\nquit\n"))
    assert cli.main([]) == 0
    assert "\x03" in capsys.readouterr().out
