"""Plate formats loaded from YAML/JSON definitions."""
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

import yaml


@dataclass(frozen=True)
class PlateFormat:
    name: str
    rows: int
    columns: int

    @property
    def wells(self) -> int:
        return self.rows * self.columns


class FormatLibrary:
    """Loads plate formats from every definition file in a directory."""

    def __init__(self, format_dir: Optional[Path] = None):
        base_dir = format_dir or Path(__file__).parent / "layouts"
        self.format_dir = Path(base_dir)
        self._formats: Optional[Dict[str, PlateFormat]] = None

    def get_format(self, name: str) -> PlateFormat:
        formats = self._load()
        if name not in formats:
            raise KeyError(f"Plate format {name} not found in {self.format_dir}")
        return formats[name]

    def names(self) -> List[str]:
        formats = self._load()
        return sorted(formats, key=lambda name: formats[name].wells)

    def _load(self) -> Dict[str, PlateFormat]:
        if self._formats is None:
            formats: Dict[str, PlateFormat] = {}
            for path in sorted(self.format_dir.glob("*")):
                if path.suffix not in (".yaml", ".yml", ".json"):
                    continue
                with path.open() as f:
                    raw = yaml.safe_load(f) or {}
                for entry in raw.get("formats", []):
                    plate_format = PlateFormat(
                        name=str(entry["name"]), rows=int(entry["rows"]), columns=int(entry["columns"])
                    )
                    formats[plate_format.name] = plate_format
            self._formats = formats
        return self._formats
