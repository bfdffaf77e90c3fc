import pytest

from cmdlisp.errors import CommandArityError, CommandError, CommandTypeError
from cmdlisp.evaluation.evaluator import evaluate_string
from cmdlisp.types.value import Str, List


def test_get_basedir(ctx, tmp_path):
    assert evaluate_string("(get-basedir)", ctx) == Str(str(tmp_path))


def test_basedir_relative_to_current(ctx, tmp_path):
    (tmp_path / "sub" / "inner").mkdir(parents=True)
    result = evaluate_string('(basedir "sub")', ctx)
    expected = (tmp_path / "sub").resolve()
    assert result == Str(f"Base directory set to: {expected}")
    assert ctx.get_basedir() == expected

    evaluate_string('(basedir "inner")', ctx)
    assert ctx.get_basedir() == expected / "inner"

    evaluate_string('(basedir "..")', ctx)
    assert ctx.get_basedir() == expected


def test_basedir_absolute(ctx, tmp_path):
    target = tmp_path / "abs"
    target.mkdir()
    evaluate_string(f'(basedir "{target}")', ctx)
    assert ctx.get_basedir() == target.resolve()


def test_basedir_errors(ctx, tmp_path):
    (tmp_path / "file.txt").write_text("x")
    with pytest.raises(CommandError, match="Path does not exist"):
        evaluate_string('(basedir "missing")', ctx)
    with pytest.raises(CommandError, match="not a directory"):
        evaluate_string('(basedir "file.txt")', ctx)
    with pytest.raises(CommandTypeError):
        evaluate_string("(basedir 1)", ctx)
    with pytest.raises(CommandArityError):
        evaluate_string("(basedir)", ctx)
    assert ctx.get_basedir() == tmp_path


def test_basedir_root_walks_up(ctx, tmp_path, monkeypatch):
    root = tmp_path.resolve()
    (root / "project.marker").write_text("")
    nested = root / "a" / "b"
    nested.mkdir(parents=True)
    monkeypatch.chdir(nested)

    result = evaluate_string('(basedir-root "project.marker")', ctx)
    assert ctx.get_basedir() == root
    assert result == Str(
        f"Found 'project.marker' at: {root / 'project.marker'}\nBase directory set to: {root}"
    )


def test_basedir_root_defaults_to_git(ctx, tmp_path, monkeypatch):
    root = tmp_path.resolve()
    (root / ".git").mkdir()
    (root / "src").mkdir()
    monkeypatch.chdir(root / "src")
    evaluate_string("(basedir-root)", ctx)
    assert ctx.get_basedir() == root


def test_basedir_root_not_found(ctx, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(CommandError, match="not found in any parent directory"):
        evaluate_string('(basedir-root "no-such-marker-3f9a1c")', ctx)
    with pytest.raises(CommandArityError):
        evaluate_string('(basedir-root "a" "b")', ctx)


def test_fs_list_matches_files_only(ctx, tmp_path):
    for name in ("b.py", "a.py", "notes.txt", "config.toml", "config.yaml"):
        (tmp_path / name).write_text("")
    (tmp_path / "pkg.py").mkdir()

    assert evaluate_string('(fs-list "*.py")', ctx) == List((Str("a.py"), Str("b.py")))
    assert evaluate_string('(fs-list "config.*")', ctx) == List((Str("config.toml"), Str("config.yaml")))
    assert evaluate_string('(fs-list "?.py")', ctx) == List((Str("a.py"), Str("b.py")))
    assert evaluate_string('(fs-list "*.rs")', ctx) == List(())


def test_write_and_read_file(ctx, tmp_path):
    path = evaluate_string('(write-file "VERSION" "1.2.0")', ctx)
    assert path == Str(str(tmp_path / "VERSION"))
    assert (tmp_path / "VERSION").read_text() == "1.2.0"
    assert evaluate_string('(read-file "VERSION")', ctx) == Str("1.2.0")


def test_write_file_renders_non_strings(ctx, tmp_path):
    evaluate_string('(write-file "n.txt" (list 1 2))', ctx)
    assert (tmp_path / "n.txt").read_text() == "(1 2)"


def test_read_missing_file(ctx):
    with pytest.raises(CommandError, match="Failed to read file"):
        evaluate_string('(read-file "absent.txt")', ctx)


def test_read_file_rejects_undecodable_bytes(ctx, tmp_path):
    (tmp_path / "bin.dat").write_bytes(b"\xff\xfe\x00bad")
    with pytest.raises(CommandError, match="Failed to read file") as excinfo:
        evaluate_string('(read-file "bin.dat")', ctx)
    assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)
