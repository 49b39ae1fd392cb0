"""End-to-end test: load a legacy document, drag a sewing across the seam, save and reload."""

import json
from pathlib import Path

import pytest

from seamline.core import BlockNormalizer
from seamline.domain import Point

from seamline.interaction import PatternEditor
from seamline.io import DocumentReader, DocumentWriter


def coords(points) -> list[float]:
    return [c for p in points for c in p.to_tuple()]


SQUARE = [{"x": 0, "y": 0}, {"x": 100, "y": 0}, {"x": 100, "y": 100}, {"x": 0, "y": 100}, {"x": 0, "y": 0}]


@pytest.fixture
def document(tmp_path: Path) -> Path:
    """Legacy document: closed 100x100 parent, sewing on offsets 320..360."""
    data = {
        "blocks": [
            {
                "id": 1,
                "name": "Collar",
                "entities": [
                    {"id": 1, "layer": "segment", "vertexes": SQUARE},
                    {
                        "id": 2,
                        "layer": "sewing",
                        "segmentId": 1,
                        "startOffset": 320,
                        "endOffset": 360,
                        "vertexes": [],
                    },
                ],
            }
        ]
    }
    path = tmp_path / "collar.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def load(path: Path) -> list:
    with DocumentReader(path) as reader:
        return BlockNormalizer().normalize(reader.iter_raw_blocks())


class TestDragSession:
    """Drag a sewing through the editor and persist it."""

    def test_drag_across_seam_and_reload(self, document: Path, tmp_path: Path) -> None:
        blocks = load(document)
        sewing = blocks[0].get_sewing(2)
        assert (sewing.start_ratio, sewing.end_ratio) == pytest.approx((0.8, 0.9))
        assert coords(sewing.vertexes) == pytest.approx([0, 80, 0, 40])

        editor = PatternEditor(blocks)
        assert editor.pointer_down(Point(0, 60))

        editor.pointer_move(Point(0, 30))
        sewing = editor.blocks[0].get_sewing(2)
        assert (sewing.start_ratio, sewing.end_ratio) == pytest.approx((0.875, 0.975))

        # Crossing the seam keeps sliding and stores the span back inside [0, 1]
        editor.pointer_move(Point(30, 0))
        sewing = editor.blocks[0].get_sewing(2)
        assert (sewing.start_ratio, sewing.end_ratio) == pytest.approx((0.025, 0.125))
        assert sewing.vertexes[0].distance_to(Point(10, 0)) < 1e-6
        assert sewing.vertexes[-1].distance_to(Point(50, 0)) < 1e-6

        editor.pointer_up()

        output = tmp_path / "collar-normalized.json"
        DocumentWriter(output).write(editor.blocks)
        reloaded = load(output)[0].get_sewing(2)

        assert (reloaded.start_ratio, reloaded.end_ratio) == pytest.approx((0.025, 0.125))
        assert len(reloaded.vertexes) == len(sewing.vertexes)
        for a, b in zip(reloaded.vertexes, sewing.vertexes):
            assert a.distance_to(b) < 1e-6

    def test_sewing_follows_block_drag(self, document: Path) -> None:
        """Test translating a block carries its sewings unchanged in ratio."""
        editor = PatternEditor(load(document))
        assert editor.pointer_down(Point(50, 50))
        editor.pointer_move(Point(80, 50))
        editor.pointer_up()

        sewing = editor.blocks[0].get_sewing(2)
        assert coords(sewing.vertexes) == pytest.approx([30, 80, 30, 40])
        assert (sewing.start_ratio, sewing.end_ratio) == pytest.approx((0.8, 0.9))
