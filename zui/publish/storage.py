"""
Storage for the objects created by each publish.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List


class CreatedObjectsStore:
    """Writes one JSON file per published package.

    Structure:
        {directory}/
        ├── account-extensions.json   # [{"type": ..., "id": ...}, ...]
        └── ...
    """

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def path_for(self, named_address: str) -> Path:
        return self.directory / f"{named_address.replace('_', '-')}.json"

    def write(self, named_address: str, objects: List[Dict[str, Any]]) -> Path:
        """Write the created objects of one package and return the file path."""
        self.directory.mkdir(parents=True, exist_ok=True)
        full_path = self.path_for(named_address)
        full_path.write_text(json.dumps(objects, indent=2), encoding="utf-8")
        return full_path
