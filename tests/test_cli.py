"""Tests for the command line entry point."""

import pytest

from nbody_octree.cli import build_parser, config_from_args, main


class TestParser:
    """Tests for argument parsing."""

    def test_defaults(self):
        args = build_parser().parse_args([])
        config = config_from_args(args)

        assert config.body_count == 10000
        assert config.theta == 1.0
        assert config.use_barnes_hut is True
        assert args.steps is None
        assert args.svg is None

    def test_direct_flag(self):
        args = build_parser().parse_args(["--direct", "--workers", "2"])
        config = config_from_args(args)

        assert config.use_barnes_hut is False
        assert config.workers == 2


class TestMain:
    """Tests for running simulations from the command line."""

    def test_quiet_run(self, capsys):
        code = main(
            ["--bodies", "20", "--steps", "2", "--seed", "1", "--dimensions", "1e12", "--quiet"]
        )

        assert code == 0
        assert capsys.readouterr().out == ""

    def test_progress_output(self, capsys):
        """One line per reported step."""
        main(["--bodies", "10", "--steps", "4", "--seed", "3", "--report-every", "2"])

        lines = capsys.readouterr().out.strip().splitlines()
        assert len(lines) == 2
        assert lines[0].startswith("step      2")
        assert lines[1].startswith("step      4")

    def test_writes_svg(self, tmp_path):
        target = tmp_path / "snapshot.svg"
        code = main(
            [
                "--bodies",
                "15",
                "--steps",
                "1",
                "--seed",
                "2",
                "--central-mass",
                "0",
                "--quiet",
                "--svg",
                str(target),
            ]
        )

        assert code == 0
        svg = target.read_text()
        assert svg.startswith("<svg")
        assert "<circle" in svg

    def test_direct_run(self):
        assert main(["--bodies", "10", "--steps", "1", "--seed", "4", "--direct", "--quiet"]) == 0

    @pytest.mark.parametrize(
        "argv",
        [
            ["--theta", "-1"],
            ["--bodies", "0"],
            ["--dimensions", "0"],
            ["--workers", "0"],
            ["--steps", "-3"],
            ["--report-every", "0"],
        ],
    )
    def test_invalid_arguments_exit_2(self, argv, capsys):
        """Invalid values are reported through argparse."""
        with pytest.raises(SystemExit) as excinfo:
            main(argv)

        assert excinfo.value.code == 2
        assert "error" in capsys.readouterr().err
