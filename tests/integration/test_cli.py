"""Integration tests for the command line interface."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from seamline import __version__
from seamline.cli.app import app
from seamline.config import GenerationConfig, SeamlineSettings

runner = CliRunner()

SQUARE = [{"x": 0, "y": 0}, {"x": 100, "y": 0}, {"x": 100, "y": 100}, {"x": 0, "y": 100}, {"x": 0, "y": 0}]


@pytest.fixture
def document(tmp_path: Path) -> Path:
    """Legacy document with one closed block, one sewing and one orphan."""
    data = {
        "blocks": [
            {
                "id": 1,
                "name": "Collar",
                "entities": [
                    {"id": 1, "layer": "segment", "vertexes": SQUARE},
                    {"id": 2, "layer": "sewing", "segmentId": 1, "startOffset": 320, "endOffset": 360},
                    {"id": 3, "layer": "sewing", "segmentId": 99, "startRatio": 0.1, "endRatio": 0.2},
                ],
            }
        ]
    }
    path = tmp_path / "collar.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def read_json(path: Path) -> dict:
    return json.loads(path.read_text(encoding="utf-8"))


class TestGlobalOptions:
    """Tests for the app callback."""

    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_log_file(self, document: Path, tmp_path: Path) -> None:
        log_file = tmp_path / "seamline.log"
        result = runner.invoke(app, ["--log-file", str(log_file), "-q", "inspect", str(document)])
        assert result.exit_code == 0
        assert "Sewing skipped" in log_file.read_text(encoding="utf-8")


class TestInspect:
    """Tests for the inspect command."""

    def test_summary(self, document: Path) -> None:
        result = runner.invoke(app, ["inspect", str(document)])
        assert result.exit_code == 0
        assert "1 blocks" in result.output
        assert "1 skipped" in result.output

    def test_verbose_lists_sewings(self, document: Path) -> None:
        result = runner.invoke(app, ["inspect", str(document), "--verbose"])
        assert result.exit_code == 0
        assert "missing parent" in result.output
        assert "same" in result.output

    def test_missing_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["inspect", str(tmp_path / "nope.json")])
        assert result.exit_code == 1
        assert "Could not load document" in result.output

    def test_invalid_document(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text('{"blocks": [{"id": "x"}]}', encoding="utf-8")
        result = runner.invoke(app, ["inspect", str(path)])
        assert result.exit_code == 1


class TestNormalize:
    """Tests for the normalize command."""

    def test_writes_ratios(self, document: Path) -> None:
        result = runner.invoke(app, ["-q", "normalize", str(document)])
        assert result.exit_code == 0

        data = read_json(document.parent / "collar-normalized.json")
        assert data["version"] == 2
        sewing = data["blocks"][0]["entities"][1]
        assert sewing["startRatio"] == pytest.approx(0.8)
        assert sewing["endRatio"] == pytest.approx(0.9)
        assert "startOffset" not in sewing
        ys = [v["y"] for v in sewing["vertexes"]]
        assert ys == pytest.approx([80.0, 40.0])

    def test_output_option(self, document: Path, tmp_path: Path) -> None:
        output = tmp_path / "custom.json"
        result = runner.invoke(app, ["normalize", str(document), "-o", str(output)])
        assert result.exit_code == 0
        assert output.exists()


class TestHit:
    """Tests for the hit command."""

    def test_sewing_hit(self, document: Path) -> None:
        result = runner.invoke(app, ["hit", str(document), "0", "60"])
        assert result.exit_code == 0
        assert "sewing 2 (block 1)" in result.output

    def test_block_hit(self, document: Path) -> None:
        result = runner.invoke(app, ["hit", str(document), "50", "50"])
        assert "block 1 (block 1)" in result.output

    def test_screen_coordinates(self, document: Path) -> None:
        """Test screen input is mapped through zoom and pan."""
        args = ["hit", str(document), "10", "130", "--screen", "--zoom", "2", "--pan-x", "10", "--pan-y", "10"]
        result = runner.invoke(app, args)
        assert result.exit_code == 0
        assert "sewing 2" in result.output

    def test_miss(self, document: Path) -> None:
        result = runner.invoke(app, ["hit", str(document), "500", "500"])
        assert "nothing hit" in result.output


class TestDrag:
    """Tests for the drag command."""

    def test_drag_path(self, document: Path, tmp_path: Path) -> None:
        output = tmp_path / "dragged.json"
        args = [
            "-q",
            "drag",
            str(document),
            "--sewing",
            "2",
            "--grab",
            "0,60",
            "--to",
            "0,30",
            "--to",
            "30,0",
            "-o",
            str(output),
        ]
        result = runner.invoke(app, args)
        assert result.exit_code == 0

        sewing = read_json(output)["blocks"][0]["entities"][1]
        assert sewing["startRatio"] == pytest.approx(0.025)
        assert sewing["endRatio"] == pytest.approx(0.125)

    def test_unknown_sewing(self, document: Path) -> None:
        result = runner.invoke(app, ["drag", str(document), "--sewing", "42", "--to", "1,1"])
        assert result.exit_code == 1
        assert "No sewing with id 42" in result.output

    def test_bad_point(self, document: Path) -> None:
        result = runner.invoke(app, ["drag", str(document), "--sewing", "2", "--to", "abc"])
        assert result.exit_code == 2


class TestGenerate:
    """Tests for the generate command."""

    def test_generates_blocks(self, document: Path) -> None:
        result = runner.invoke(app, ["-q", "generate", str(document), "--count", "3", "--seed", "1"])
        assert result.exit_code == 0

        data = read_json(document.parent / "collar-generated.json")
        assert [b["name"] for b in data["blocks"]] == ["Collar #1", "Collar #2", "Collar #3"]
        ids = [e["id"] for b in data["blocks"] for e in b["entities"]]
        assert ids == list(range(1, 10))

    def test_zero_count(self, document: Path) -> None:
        result = runner.invoke(app, ["generate", str(document), "--count", "0"])
        assert result.exit_code == 1
        assert "count must be positive" in result.output

    def test_empty_template(self, tmp_path: Path) -> None:
        empty = tmp_path / "empty.json"
        empty.write_text(json.dumps({"blocks": []}), encoding="utf-8")
        result = runner.invoke(app, ["generate", str(empty), "--count", "2"])
        assert result.exit_code == 1
        assert "template has no blocks" in result.output
        assert "count must be positive" not in result.output

    def test_defaults_come_from_settings(
        self, document: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test omitted --gap and --seed fall back to the generation settings."""
        explicit = tmp_path / "explicit.json"
        result = runner.invoke(
            app,
            ["-q", "generate", str(document), "-n", "12", "--gap", "5", "--seed", "3", "-o", str(explicit)],
        )
        assert result.exit_code == 0

        def configured(**kwargs: object) -> SeamlineSettings:
            return SeamlineSettings(generation=GenerationConfig(gap=5.0, seed=3), **kwargs)

        monkeypatch.setattr("seamline.cli.app.SeamlineSettings", configured)
        from_settings = tmp_path / "from-settings.json"
        result = runner.invoke(app, ["-q", "generate", str(document), "-n", "12", "-o", str(from_settings)])
        assert result.exit_code == 0

        assert read_json(from_settings) == read_json(explicit)
