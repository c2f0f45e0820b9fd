"""Test CLI main module"""

import pytest
from slice2ts.cli.main import build_parser, main


@pytest.fixture
def slice_dir(tmp_path):
    root = tmp_path / "slices"
    (root / "Foo").mkdir(parents=True)
    (root / "Foo" / "Types.ice").write_text("module Foo { enum Color { Red }; };")
    return root


class TestCliMain:
    """Test suite for CLI main"""

    def test_parser_defaults(self):
        """Test option defaults"""
        args = build_parser().parse_args(["-o", "out", "a.ice"])
        assert args.files == ["a.ice"]
        assert args.root_dirs == []
        assert args.no_js is False
        assert args.slice2js == "slice2js"
        assert args.ice_slice_dir is True
        assert build_parser().parse_args(["-o", "out", "--no-ice-slice-dir", "a.ice"]).ice_slice_dir is False

    def test_repeatable_options(self):
        """Test root dirs, excludes and ignores accumulate"""
        args = build_parser().parse_args([
            "--root-dir", "a", "--root-dir", "b",
            "-e", "x.ice", "--exclude", "y.ice",
            "-i", "Foo::A", "--ignore", "::Foo::B",
            "-o", "out", "--no-js", "--ice-imports", "--index", "--no-nullable-values",
            "f.ice",
        ])
        assert args.root_dirs == ["a", "b"]
        assert args.exclude == ["x.ice", "y.ice"]
        assert args.ignore == ["Foo::A", "::Foo::B"]
        assert args.no_js and args.ice_imports and args.index and args.no_nullable_values

    def test_generates_typings(self, slice_dir, tmp_path, capsys):
        """Test running the CLI writes typings and lists them"""
        out = tmp_path / "out"
        main([
            "--root-dir", str(slice_dir),
            "-o", str(out),
            "--no-js",
            str(slice_dir / "Foo" / "Types.ice"),
        ])

        typings = (out / "Foo" / "Types.d.ts").read_text()
        assert "class Color<Name extends ColorName = ColorName>" in typings
        assert "Generated:" in capsys.readouterr().out

    def test_verbose_summary(self, slice_dir, tmp_path, capsys):
        """Test verbose mode prints the generation summary"""
        main([
            "--root-dir", str(slice_dir),
            "-o", str(tmp_path / "out"),
            "--no-js", "-v",
            str(slice_dir / "Foo" / "Types.ice"),
        ])
        assert "=== Generation Summary ===" in capsys.readouterr().err

    def test_error_exits_with_status_1(self, slice_dir, tmp_path, capsys):
        """Test errors are printed and exit with status 1"""
        (slice_dir / "Foo" / "Bad.ice").write_text("module Foo { struct S { Missing m; }; };")

        with pytest.raises(SystemExit) as exc_info:
            main([
                "--root-dir", str(slice_dir),
                "-o", str(tmp_path / "out"),
                "--no-js",
                str(slice_dir / "Foo" / "Bad.ice"),
            ])

        assert exc_info.value.code == 1
        assert "Error: Foo/Bad: Type not found: Missing" in capsys.readouterr().err

    def test_missing_out_dir(self):
        """Test out dir is required"""
        with pytest.raises(SystemExit):
            build_parser().parse_args(["a.ice"])
