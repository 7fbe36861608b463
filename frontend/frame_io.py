"""Save rendered frames as PNG with the traced hits embedded as metadata.

The frame record (light position, tracer params and the ordered hits) is
stored as JSON in a PNG tEXt chunk (key: ``lightcast_frame``), so a saved
frame is both an image and a replayable trace.

Used by ``demo.py`` for its output files and ``--params-from`` option.
"""

from __future__ import annotations

import json
from typing import Sequence

from PIL import Image
from PIL.PngImagePlugin import PngInfo

from lightcast.types import Hit, Point, TracerParams

METADATA_KEY = "lightcast_frame"


def frame_record(
    time: float,
    source: Point,
    params: TracerParams,
    ordered: Sequence[Hit],
) -> dict:
    return {
        "time": time,
        "source": list(source),
        "params": params.to_dict(),
        "hits": [h.to_dict() for h in ordered],
    }


def save_frame_png(img: Image.Image, record: dict, path) -> None:
    """Save a rendered frame with its record embedded as a PNG tEXt chunk."""
    info = PngInfo()
    info.add_text(METADATA_KEY, json.dumps(record))
    img.save(path, pnginfo=info)


def load_frame_png(path) -> dict:
    """Load a frame record from a PNG file's tEXt metadata.

    Raises ValueError if the PNG does not contain frame metadata.
    """
    with Image.open(path) as img:
        text_data = getattr(img, "text", None)
        if not text_data or METADATA_KEY not in text_data:
            raise ValueError(
                f"{path}: no frame metadata (missing '{METADATA_KEY}' chunk)"
            )
        return json.loads(text_data[METADATA_KEY])


def load_frame_params(path) -> TracerParams:
    return TracerParams.from_dict(load_frame_png(path).get("params"))
