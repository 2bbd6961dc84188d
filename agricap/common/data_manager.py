"""
Data manager - reads the crop and field catalogs from JSON files.

Catalog files:
    crops.json   {"crops": [...]}
    fields.json  {"fields": [...]}

Usage:
    dm = DataManager()
    crops = dm.load_crops()
    fields = dm.load_fields()
"""
from pathlib import Path
import json
import logging
from typing import Optional, Dict, Any, List

from ..farm.models import Crop, Field

logger = logging.getLogger(__name__)


class DataManager:
    """
    Catalog data manager

    Defaults to the resources/catalog directory bundled with the package.
    """

    def __init__(self, base_path: Optional[Path] = None):
        if base_path:
            self.root = Path(base_path)
        else:
            # __file__ is .../agricap/common/data_manager.py -> parents[1] is the package root
            self.root = Path(__file__).resolve().parents[1] / "resources" / "catalog"

    def load_crops(self) -> List[Crop]:
        """Read the crop catalog; names must be unique."""
        crops = [Crop(**c) for c in self._read_json(self.root / "crops.json").get("crops", [])]
        if not crops:
            raise ValueError(f"no crops defined in {self.root / 'crops.json'}")
        names = [c.name for c in crops]
        if len(set(names)) != len(names):
            raise ValueError("crop names must be unique")
        logger.debug("loaded %d crops from %s", len(crops), self.root)
        return crops

    def load_fields(self) -> List[Field]:
        """Read the field catalog. The first field becomes the starting field; all must be unplanted."""
        fields = [Field(**f) for f in self._read_json(self.root / "fields.json").get("fields", [])]
        if not fields:
            raise ValueError(f"no fields defined in {self.root / 'fields.json'}")
        planted = [f.name for f in fields if not f.is_empty]
        if planted:
            raise ValueError(f"catalog fields must start empty: {', '.join(planted)}")
        logger.debug("loaded %d fields from %s", len(fields), self.root)
        return fields

    def load_config(self, path: Path) -> Dict[str, Any]:
        """Read a flat JSON config file."""
        return self._read_json(Path(path))

    # ========== internals ==========
    def _read_json(self, path: Path) -> Dict[str, Any]:
        return json.loads(path.read_text(encoding="utf-8"))
