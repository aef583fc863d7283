"""Tests for the ortho-connector command-line interface."""

import io
import json

import pytest
from rich.console import Console

from ortho_connector import __version__
from ortho_connector.cli import main
from ortho_connector.cli.route_cmd import build_endpoint
from ortho_connector.cli.utils import format_error, print_error, render_error
from ortho_connector.exceptions import ConfigurationError, ValidationError
from ortho_connector.router import AttachedEndpoint, Direction, FreeEndpoint, Point, Rect

FACING_ARGS = [
    "route",
    "--start", "100,25",
    "--start-box", "0,0,100,50",
    "--start-dir", "right",
    "--end", "400,25",
    "--end-box", "400,0,100,50",
    "--end-dir", "left",
]  # fmt: skip


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Run every command in an empty project without user config."""
    (tmp_path / ".git").mkdir()
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("ortho_connector.config.USER_CONFIG_PATH", tmp_path / "no-exist.toml")
    return tmp_path


class TestMain:
    """Tests for the top-level parser."""

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "route" in capsys.readouterr().out

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--version"])
        assert exc.value.code == 0
        assert __version__ in capsys.readouterr().out


class TestRouteCommand:
    """Tests for `ortho-connector route`."""

    def test_json_output(self, capsys):
        assert main(FACING_ARGS + ["--format", "json"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["found"] is True
        assert data["control_points"] == [[100, 25], [400, 25]]
        assert data["cost"] == pytest.approx(2.0)
        assert "debug_waypoints" not in data

    def test_json_debug_output(self, capsys):
        assert main(FACING_ARGS + ["--format", "json", "--debug"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["covered"] is False
        assert len(data["boundary_boxes"]) == 2
        assert [250, 25] in data["debug_waypoints"]

    def test_table_output(self, capsys):
        assert main(FACING_ARGS) == 0
        out = capsys.readouterr().out
        assert "Control Points" in out
        assert "Bends: 0" in out

    def test_free_points(self, capsys):
        args = ["route", "--start", "0,0", "--end", "100,100", "--format", "json"]
        assert main(args) == 0

        points = json.loads(capsys.readouterr().out)["control_points"]
        assert points[0] == [0, 0]
        assert points[-1] == [100, 100]

    def test_min_dist_option(self, capsys):
        assert main(FACING_ARGS + ["--format", "json", "--debug", "--min-dist", "10"]) == 0
        boxes = json.loads(capsys.readouterr().out)["boundary_boxes"]
        assert boxes[0] == [-10, -10, 110, 60]

    def test_config_sets_default_format(self, isolated_config, capsys):
        (isolated_config / ".ortho-connector.toml").write_text(
            "[defaults]\nformat = 'json'\n\n[route]\nmin_dist = 5\n"
        )
        assert main(FACING_ARGS + ["--debug"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["boundary_boxes"][0] == [-5, -5, 105, 55]

    def test_invalid_point(self, capsys):
        assert main(["route", "--start", "1", "--end", "a,b"]) == 1
        err = capsys.readouterr().err
        assert "Validation failed with 2 error(s)" in err
        assert "start: expected 2 comma-separated numbers" in err
        assert "end: not a number" in err

    def test_box_requires_direction(self, capsys):
        assert main(["route", "--start", "0,0", "--start-box", "0,0,10,10", "--end", "50,50"]) == 1
        assert "--start-dir is required" in capsys.readouterr().err

    def test_negative_min_dist(self, capsys):
        assert main(["route", "--start", "0,0", "--end", "50,50", "--min-dist", "-1"]) == 1
        assert "min-dist" in capsys.readouterr().err

    def test_invalid_config_value(self, isolated_config, capsys):
        (isolated_config / ".ortho-connector.toml").write_text("[route]\nmin_dist = -3\n")
        assert main(FACING_ARGS) == 1
        assert "Invalid clearance distance" in capsys.readouterr().err

    def test_negative_coordinates_with_equals(self, capsys):
        args = ["route", "--start=-10,5", "--end=40,-20", "--format", "json"]
        assert main(args) == 0

        points = json.loads(capsys.readouterr().out)["control_points"]
        assert points[0] == [-10, 5]
        assert points[-1] == [40, -20]

    def test_help_shows_negative_form(self, capsys):
        with pytest.raises(SystemExit):
            main(["route", "--help"])
        assert "--start=-10,5" in capsys.readouterr().out

    def test_unknown_direction_rejected_by_parser(self):
        with pytest.raises(SystemExit) as exc:
            main(["route", "--start", "0,0", "--end", "1,1", "--start-dir", "up"])
        assert exc.value.code == 2


class TestBuildEndpoint:
    """Tests for endpoint parsing."""

    def test_free_endpoint(self):
        errors = []
        endpoint = build_endpoint("start", "1,2", None, None, errors)
        assert endpoint == FreeEndpoint(Point(1, 2))
        assert errors == []

    def test_attached_endpoint(self):
        errors = []
        endpoint = build_endpoint("end", "10,5", "0,0,10,10", "right", errors)
        assert endpoint == AttachedEndpoint(Rect(0, 0, 10, 10), Point(10, 5), Direction.RIGHT)

    def test_negative_box_size(self):
        errors = []
        assert build_endpoint("end", "10,5", "0,0,-10,10", "right", errors) is None
        assert "non-negative" in errors[0]

    def test_earlier_errors_do_not_leak(self):
        errors = ["start: broken"]
        endpoint = build_endpoint("end", "10,5", "0,0,10,10", "right", errors)
        assert endpoint is not None


class TestConfigCommand:
    """Tests for `ortho-connector config`."""

    def test_template(self, capsys):
        assert main(["config", "--template"]) == 0
        out = capsys.readouterr().out
        assert "[defaults]" in out
        assert "[route]" in out

    def test_paths(self, capsys):
        assert main(["config", "--paths"]) == 0
        out = capsys.readouterr().out
        assert "user: (not found)" in out
        assert "project: (not found)" in out

    def test_show(self, isolated_config, capsys):
        config_file = isolated_config / ".ortho-connector.toml"
        config_file.write_text("[route]\nturn_penalty = 0.5\n")

        assert main(["config", "--show"]) == 0
        out = capsys.readouterr().out
        assert "route.min_dist = 20.0  (default)" in out
        assert "route.turn_penalty = 0.5" in out
        assert ".ortho-connector.toml" in out

    def test_show_invalid_toml(self, isolated_config, capsys):
        (isolated_config / ".ortho-connector.toml").write_text("[route\n")
        assert main(["config", "--show"]) == 1
        assert "Invalid TOML" in capsys.readouterr().err


class TestFormatError:
    """Tests for plain-text error formatting."""

    def test_own_errors(self):
        assert format_error(ValidationError(["bad"])).startswith("Error: Validation failed")

    def test_other_errors(self):
        assert format_error(ValueError("nope")) == "Error: ValueError: nope"


def _render(e: Exception) -> str:
    console = Console(file=io.StringIO(), record=True, width=100)
    console.print(render_error(e))
    return console.export_text()


class TestRenderError:
    """Tests for the Rich error panel."""

    def test_context_and_suggestions(self):
        error = ConfigurationError(
            "Invalid clearance distance",
            context={"route.min_dist": -5},
            suggestions=["Use a non-negative min_dist"],
        )
        text = _render(error)

        assert "Error" in text
        assert text.count("Invalid clearance distance") == 1
        assert "Context" in text
        assert "route.min_dist" in text
        assert "-5" in text
        assert "Suggestions" in text
        assert "- Use a non-negative min_dist" in text

    def test_message_only(self):
        text = _render(ConfigurationError("Bad [route] table"))
        assert "Bad [route] table" in text
        assert "Context" not in text
        assert "Suggestions" not in text

    def test_other_errors_show_type(self):
        assert "ValueError: nope" in _render(ValueError("nope"))

    def test_print_error_rich(self, capsys):
        print_error(ValidationError(["start: bad"], suggestions=["Check the point"]), use_rich=True)
        err = capsys.readouterr().err
        assert "1. start: bad" in err
        assert "Check the point" in err

    def test_print_error_plain(self, capsys):
        print_error(ValueError("nope"), use_rich=False)
        assert capsys.readouterr().err.strip() == "Error: ValueError: nope"
