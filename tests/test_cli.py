"""Tests for the command-line interface."""

import pytest

from champollion.cli import create_parser, main


def run_args(corpus_files, index_dir, *extra):
    source, target = corpus_files
    return ["--source", source, "--target", target, "--index-dir", index_dir, *extra]


class TestCreateParser:
    """Test argument parsing."""

    def test_thresholds_parsed(self) -> None:
        """Numeric flags are converted by argparse."""
        args = create_parser().parse_args(["--co", "member states", "--tf", "3", "--td", "0.2"])
        assert (args.co, args.tf, args.td) == ("member states", 3, 0.2)

    def test_unknown_containment_rejected(self) -> None:
        """Containment is limited to the known modes."""
        with pytest.raises(SystemExit):
            create_parser().parse_args(["--co", "x", "--containment", "fuzzy"])


class TestMain:
    """Test the end-to-end CLI flow."""

    def test_index_then_translate(self, corpus_files, tmp_path, capsys) -> None:
        """--index builds the index and the translation is printed."""
        argv = run_args(corpus_files, str(tmp_path / "index"),
                        "--index", "--co", "human rights", "--tf", "1", "--td", "0.5")
        assert main(argv) == 0
        out = capsys.readouterr().out
        assert 'Finding translation for "human rights".  Found 2 times in source corpus.' in out
        assert out.rstrip().endswith("menschen rechte")
        assert out.count("Finding translation") == 1

    def test_reuses_existing_index(self, corpus_files, tmp_path, capsys) -> None:
        """A second run without --index reads the saved index."""
        index_dir = str(tmp_path / "index")
        assert main(run_args(corpus_files, index_dir, "--index")) == 0
        assert main(["--index-dir", index_dir, "--co", "human rights", "--tf", "1", "--td", "0.5"]) == 0
        assert "menschen rechte" in capsys.readouterr().out

    def test_no_translation_message(self, corpus_files, tmp_path, capsys) -> None:
        """An absent collocation reports zero occurrences."""
        argv = run_args(corpus_files, str(tmp_path / "index"), "--index", "--co", "european parliament")
        assert main(argv) == 0
        out = capsys.readouterr().out
        assert "Found 0 times" in out
        assert "No translation found." in out

    def test_missing_index_exits_1(self, tmp_path, capsys) -> None:
        """Translating without a built index fails with exit status 1."""
        assert main(["--index-dir", str(tmp_path / "none"), "--co", "human rights"]) == 1
        assert "Index unavailable" in capsys.readouterr().err

    @pytest.mark.parametrize("extra", [
        ["--tf", "0"],
        ["--td", "1.5"],
        ["--td", "0"],
        ["--jobs", "0"],
    ])
    def test_invalid_thresholds_exit_2(self, tmp_path, extra) -> None:
        """Invalid settings are usage errors."""
        with pytest.raises(SystemExit) as exc:
            main(["--index-dir", str(tmp_path), "--co", "human rights", *extra])
        assert exc.value.code == 2

    def test_nothing_to_do_exits_2(self) -> None:
        """Neither --co nor --index is a usage error."""
        with pytest.raises(SystemExit) as exc:
            main([])
        assert exc.value.code == 2

    def test_index_needs_both_corpora(self, tmp_path) -> None:
        """--index without --target is a usage error."""
        with pytest.raises(SystemExit) as exc:
            main(["--index", "--source", "a.txt", "--index-dir", str(tmp_path)])
        assert exc.value.code == 2
