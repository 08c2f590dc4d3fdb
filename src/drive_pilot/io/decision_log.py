"""Per-frame decision record writer using orjson."""

from __future__ import annotations

from pathlib import Path

import orjson

from drive_pilot.schemas.record import DecisionRecord


class DecisionLogWriter:
    """Write one JSON file per classified frame.

    Output files are named ``{frame_stem}.json`` inside ``output_dir``.
    """

    def __init__(self, output_dir: Path) -> None:
        self.output_dir = output_dir
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def write(self, record: DecisionRecord) -> Path:
        """Write a single record to disk. Returns the output path."""
        out_path = self.output_dir / f"{Path(record.frame).stem}.json"
        data = orjson.dumps(record.model_dump(mode="json"), option=orjson.OPT_INDENT_2)
        out_path.write_bytes(data)
        return out_path
