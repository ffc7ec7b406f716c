"""CLI tests using typer's CliRunner."""

import pytest
from typer.testing import CliRunner

from main import RUN_ALL_TESTS, app

runner = CliRunner()


@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / "sample.txt"
    path.write_text("a b c a b c a b", encoding="utf-8")
    return path


class TestAnalysis:
    """Tests for the trigram report."""

    def test_stdin(self):
        result = runner.invoke(app, [], input="a b c a b\nc a b\n")
        assert result.exit_code == 0
        assert result.output.splitlines() == ["a b c: 2", "b c a: 1", "c a b: 1"]

    def test_empty_stdin(self):
        result = runner.invoke(app, [], input="")
        assert result.exit_code == 0
        assert result.output == ""

    def test_stdin_with_invalid_utf8_falls_back_to_latin_1(self):
        result = runner.invoke(app, [], input=b"one two \xff three four\n")
        assert result.exit_code == 0
        assert result.exception is None
        assert result.output.splitlines() == ["one two ÿ: 1", "two ÿ three: 1", "ÿ three four: 1"]

    def test_undecodable_stdin_is_reported(self):
        result = runner.invoke(app, ["--encoding", "utf-8"], input=b"one two \xff three four\n")
        assert result.exit_code == 0
        assert result.output.splitlines() == ["Could not decode file: <stdin>!"]

    def test_stdin_lone_carriage_return(self):
        result = runner.invoke(app, [], input=b"a\rb c d\n")
        assert result.exit_code == 0
        assert result.output.splitlines() == ["ab c d: 1"]

    def test_file_lone_carriage_return(self, tmp_path):
        path = tmp_path / "cr.txt"
        path.write_bytes(b"a\rb c d")
        result = runner.invoke(app, [str(path)])
        assert result.exit_code == 0
        assert result.output.splitlines() == ["ab c d: 1"]

    def test_path_starting_with_dash(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "-dash.txt").write_text("a b c", encoding="utf-8")
        result = runner.invoke(app, ["--", "-dash.txt"])
        assert result.exit_code == 0
        assert result.output.splitlines() == ["a b c: 1"]

    def test_file(self, sample_file):
        result = runner.invoke(app, [str(sample_file)])
        assert result.exit_code == 0
        assert result.output.splitlines() == ["a b c: 2", "b c a: 1", "c a b: 1"]

    def test_files_are_merged(self, sample_file, tmp_path):
        other = tmp_path / "other.txt"
        other.write_text("B C A", encoding="utf-8")
        result = runner.invoke(app, [str(sample_file), str(other)])
        assert result.exit_code == 0
        assert result.output.splitlines() == ["a b c: 2", "b c a: 2", "c a b: 1"]

    def test_missing_file_is_reported(self, sample_file, tmp_path):
        missing = tmp_path / "missing.txt"
        result = runner.invoke(app, [str(missing), str(sample_file)])
        assert result.exit_code == 0
        assert result.output.splitlines() == [
            f"Could not find file: {missing}!",
            "a b c: 2",
            "b c a: 1",
            "c a b: 1",
        ]

    def test_only_missing_files(self, tmp_path):
        missing = tmp_path / "missing.txt"
        result = runner.invoke(app, [str(missing)])
        assert result.exit_code == 0
        assert result.output.splitlines() == [f"Could not find file: {missing}!"]

    def test_undecodable_file_is_reported(self, tmp_path):
        path = tmp_path / "latin.txt"
        path.write_bytes("un deux trois é".encode("latin_1"))
        result = runner.invoke(app, ["--encoding", "utf-8", str(path)])
        assert result.exit_code == 0
        assert result.output.splitlines() == [f"Could not decode file: {path}!"]

    def test_default_encodings_fall_back_to_latin_1(self, tmp_path):
        path = tmp_path / "latin.txt"
        path.write_bytes("Prince Vasíli Kurágin".encode("latin_1"))
        result = runner.invoke(app, [str(path)])
        assert result.exit_code == 0
        assert result.output.splitlines() == ["prince vasíli kurágin: 1"]

    def test_top(self, sample_file):
        result = runner.invoke(app, ["--top", "1", str(sample_file)])
        assert result.exit_code == 0
        assert result.output.splitlines() == ["a b c: 2"]

    @pytest.mark.parametrize("top", ["0", "101"])
    def test_top_out_of_range(self, sample_file, top):
        result = runner.invoke(app, ["--top", top, str(sample_file)])
        assert result.exit_code == 2

    def test_report_is_limited_to_100_lines(self):
        words = " ".join(f"w{i}" for i in range(300))
        result = runner.invoke(app, [], input=words)
        assert result.exit_code == 0
        assert len(result.output.splitlines()) == 100


class TestRunAllTests:
    """Tests for the test-suite entry point."""

    def test_success(self, monkeypatch):
        calls = []

        def fake_main(args):
            calls.append(args)
            return 0

        monkeypatch.setattr(pytest, "main", fake_main)
        result = runner.invoke(app, [RUN_ALL_TESTS])
        assert result.exit_code == 0
        assert result.output.splitlines() == ["All tests passed!"]
        assert len(calls) == 1
        assert calls[0][-1].endswith("tests")

    def test_failure(self, monkeypatch):
        monkeypatch.setattr(pytest, "main", lambda args: 1)
        result = runner.invoke(app, [RUN_ALL_TESTS])
        assert result.exit_code == 1
        assert "All tests passed!" not in result.output

    def test_flag_with_other_arguments_is_a_path(self, sample_file):
        result = runner.invoke(app, [RUN_ALL_TESTS, str(sample_file)])
        assert result.exit_code == 0
        assert result.output.splitlines()[0] == f"Could not find file: {RUN_ALL_TESTS}!"
