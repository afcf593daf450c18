"""Tests for the canvasfx command line."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from canvasfx.cli import main as cli


@pytest.fixture(autouse=True)
def _isolated(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run from an empty directory without touching global logging."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(cli, "configure_logging", lambda config: None)


def _run(*argv: str) -> int:
    with pytest.raises(SystemExit) as exc:
        cli.main(list(argv))
    return exc.value.code


class TestDimensions:
    """dimensions command."""

    def test_portrait(self, capsys: pytest.CaptureFixture[str]):
        """Vertical flag swaps the canvas."""
        assert _run("dimensions", "1080p", "--vertical") == 0
        assert "1080x1920" in capsys.readouterr().out

    def test_unknown(self, capsys: pytest.CaptureFixture[str]):
        """Unknown resolutions fail with exit code 1."""
        assert _run("dimensions", "bogus") == 1
        assert "Unknown resolution" in capsys.readouterr().out


class TestResolutions:
    """resolutions command."""

    def test_category_filter(self, capsys: pytest.CaptureFixture[str]):
        """Only the requested category is listed."""
        assert _run("resolutions", "--category", "Mobile") == 0
        out = capsys.readouterr().out
        assert "360x640" in out
        assert "1920x1080" not in out

    def test_unknown_category(self):
        """Unknown categories are rejected."""
        assert _run("resolutions", "--category", "Holo") == 1


class TestSchema:
    """schema command."""

    def test_single_default_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]):
        """A single default instance is described under the file stem."""
        path = tmp_path / "glow.json"
        path.write_text(json.dumps({"opacity": 0.5, "tint": "#fff"}))

        assert _run("schema", str(path)) == 0
        out = capsys.readouterr().out
        assert "glow" in out
        assert "number" in out

    def test_catalog_file(self, tmp_path: Path, wire_default_config: dict):
        """A catalog file needs an effect id."""
        path = tmp_path / "defaults.json"
        path.write_text(json.dumps({"fuzz-flare": wire_default_config}))

        assert _run("schema", str(path), "--effect", "fuzz-flare") == 0
        assert _run("schema", str(path), "--effect", "missing") == 1

    def test_missing_file(self, tmp_path: Path):
        """Missing defaults files fail."""
        assert _run("schema", str(tmp_path / "nope.json")) == 1


class TestRescale:
    """rescale command."""

    @pytest.fixture
    def project_file(self, tmp_path: Path) -> Path:
        """Project saved at Full HD landscape."""
        path = tmp_path / "project.json"
        project = {
            "projectName": "demo",
            "targetResolution": 1920,
            "isHorizontal": True,
            "effects": [
                {
                    "id": "fx-1",
                    "name": "orbit",
                    "type": "primary",
                    "config": {
                        "center": {"name": "position", "x": 960, "y": 540},
                        "offset": {"__type": "Point2D", "x": 5, "y": 5},
                    },
                }
            ],
        }
        path.write_text(json.dumps(project))
        return path

    def test_rescale_to_output(self, project_file: Path, tmp_path: Path):
        """Positions are scaled and project metadata updated."""
        out = tmp_path / "scaled.json"

        code = _run(
            "rescale", str(project_file), "--from", "1920", "--to", "720p", "-o", str(out)
        )

        assert code == 0

        project = json.loads(out.read_text())
        config = project["effects"][0]["config"]
        assert config["center"] == {"name": "position", "x": 640, "y": 360}
        assert config["offset"] == {"__type": "Point2D", "x": 5, "y": 5}
        assert project["targetResolution"] == 1280
        assert project["isHorizontal"] is True
        assert project["projectName"] == "demo"

    def test_rescale_to_portrait_in_place(self, project_file: Path):
        """Without -o the project is overwritten."""
        code = _run("rescale", str(project_file), "--from", "hd", "--to", "hd", "--to-vertical")

        assert code == 0

        project = json.loads(project_file.read_text())
        center = project["effects"][0]["config"]["center"]
        assert center == {"name": "position", "x": 540, "y": 960}
        assert project["isHorizontal"] is False

    def test_unknown_resolution(self, project_file: Path):
        """Unknown target resolution fails without writing."""
        before = project_file.read_text()

        assert _run("rescale", str(project_file), "--from", "1920", "--to", "9999") == 1
        assert project_file.read_text() == before

    def test_bare_effect_list(self, tmp_path: Path):
        """A top-level effect list is rescaled and written back as a list."""
        path = tmp_path / "effects.json"
        path.write_text(
            json.dumps(
                [
                    {
                        "id": "fx-1",
                        "name": "orbit",
                        "type": "primary",
                        "config": {"center": {"name": "position", "x": 960, "y": 540}},
                    }
                ]
            )
        )

        assert _run("rescale", str(path), "--from", "1920", "--to", "1280") == 0

        effects = json.loads(path.read_text())
        assert isinstance(effects, list)
        assert effects[0]["config"]["center"] == {"name": "position", "x": 640, "y": 360}

    def test_empty_list(self, tmp_path: Path):
        """An empty list is a valid, if dull, effect list."""
        path = tmp_path / "effects.json"
        path.write_text("[]")

        assert _run("rescale", str(path), "--from", "1920", "--to", "1280") == 0
        assert json.loads(path.read_text()) == []

    @pytest.mark.parametrize("content", ["{not json", '"just text"'])
    def test_unreadable_project(
        self, tmp_path: Path, content: str, capsys: pytest.CaptureFixture[str]
    ):
        """Broken or non-project documents fail with exit code 1."""
        path = tmp_path / "project.json"
        path.write_text(content)

        assert _run("rescale", str(path), "--from", "1920", "--to", "1280") == 1
        assert "Could not read project" in capsys.readouterr().out
        assert path.read_text() == content

    def test_invalid_effect_entries(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]):
        """Effect entries that are not objects are reported, not raised."""
        path = tmp_path / "project.json"
        path.write_text(json.dumps({"effects": [1, 2]}))

        assert _run("rescale", str(path), "--from", "1920", "--to", "1280") == 1
        assert "Invalid effect list" in capsys.readouterr().out
