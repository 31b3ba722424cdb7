"""Tests for the command line interface."""

import pytest

from cli import main, parse_args


class TestParseArgs:
    """Tests for argument parsing."""

    def test_defaults(self):
        parsed = parse_args(["vault", "Home.md"])
        assert parsed.vault_root == "vault"
        assert parsed.notes == ["Home.md"]
        assert not parsed.recursive
        assert not parsed.skip_missing_refs
        assert parsed.ignore_file is None

    def test_flags(self):
        parsed = parse_args(["-R", "--skip-missing-refs", "vault", "A.md", "B.md"])
        assert parsed.recursive
        assert parsed.skip_missing_refs
        assert parsed.notes == ["A.md", "B.md"]


class TestMain:
    """Tests for end-to-end CLI runs."""

    def test_prints_sorted_paths(self, make_vault, capsys):
        root = make_vault({
            "Home.md": "See [[Project Plan]] and ![[diagram.png]]",
            "Project Plan.md": "[[Deep]]",
            "Deep.md": "",
            "diagram.png": b"\x89PNG",
        })

        assert main([str(root), "Home.md"]) == 0

        lines = capsys.readouterr().out.splitlines()
        assert lines == [
            str(root / "Home.md"),
            str(root / "Project Plan.md"),
            str(root / "diagram.png"),
        ]

    def test_recursive(self, make_vault, capsys):
        root = make_vault({"A.md": "[[B]]", "B.md": "[[C]]", "C.md": ""})

        assert main(["-R", str(root), "A.md"]) == 0

        lines = capsys.readouterr().out.splitlines()
        assert lines == [str(root / "A.md"), str(root / "B.md"), str(root / "C.md")]

    def test_unresolved_fails_without_output(self, make_vault, capsys):
        root = make_vault({"A.md": "[[B]] [[Missing]]", "B.md": ""})

        assert main([str(root), "A.md"]) == 1

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "could not resolve reference 'Missing'" in captured.err

    def test_skip_missing_refs(self, make_vault, capsys):
        root = make_vault({"A.md": "[[B]] [[Missing]]", "B.md": ""})

        assert main(["--skip-missing-refs", str(root), "A.md"]) == 0

        captured = capsys.readouterr()
        assert captured.out.splitlines() == [str(root / "A.md"), str(root / "B.md")]
        assert "skipping unresolved reference 'Missing'" in captured.err
        assert "skipped 1 unresolved reference(s) in total" in captured.err

    def test_indexing_failure(self, make_vault, capsys):
        root = make_vault({".export-ignore": b"\xff\xfe\n", "A.md": ""})

        assert main([str(root), "A.md"]) == 1

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Encountered an error while trying to walk" in captured.err

    def test_requires_notes(self, make_vault, capsys):
        root = make_vault({"A.md": ""})

        assert main([str(root)]) == 1
        assert "at least one note path is required" in capsys.readouterr().err

    def test_missing_vault_root(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope"), "A.md"]) == 1
        assert "does not exist" in capsys.readouterr().err

    def test_vault_root_not_directory(self, make_vault, capsys):
        root = make_vault({"A.md": ""})

        assert main([str(root / "A.md"), "A.md"]) == 1
        assert "not a directory" in capsys.readouterr().err

    def test_invalid_seed(self, make_vault, capsys):
        root = make_vault({"A.md": ""})

        assert main([str(root), "Nope.md"]) == 1
        assert "invalid input note" in capsys.readouterr().err

    def test_config_file_in_vault(self, make_vault, capsys):
        root = make_vault({
            ".wlls.yaml": "recursive: true\n",
            "A.md": "[[B]]",
            "B.md": "[[C]]",
            "C.md": "",
        })

        assert main([str(root), "A.md"]) == 0
        assert str(root / "C.md") in capsys.readouterr().out.splitlines()

    def test_explicit_config(self, make_vault, tmp_path, capsys):
        root = make_vault({"A.md": "[[Missing]]"})
        config = tmp_path / "wlls.toml"
        config.write_text("skip_missing_refs = true\n", encoding="utf-8")

        assert main(["--config", str(config), str(root), "A.md"]) == 0
        assert capsys.readouterr().out.splitlines() == [str(root / "A.md")]

    def test_invalid_config(self, make_vault, capsys):
        root = make_vault({".wlls.json": '{"recursive": 1}', "A.md": ""})

        assert main([str(root), "A.md"]) == 1
        assert "invalid configuration" in capsys.readouterr().err

    def test_output_file(self, make_vault, tmp_path, capsys):
        root = make_vault({"A.md": "[[B]]", "B.md": ""})
        output = tmp_path / "refs.txt"

        assert main([str(root), "A.md", "-o", str(output)]) == 0

        assert output.read_text(encoding="utf-8").splitlines() == [
            str(root / "A.md"),
            str(root / "B.md"),
        ]
        assert capsys.readouterr().out == ""

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            parse_args(["--version"])
        assert exc_info.value.code == 0
        assert capsys.readouterr().out.strip()
