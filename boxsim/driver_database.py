"""
Driver record database.

Holds full driver records (the JSON documents a Driver is built from) in
memory, keyed by their `general_info.uuid`, and implements the identifier
resolution used by the driver factory: an identifier is tried as a file
path first, then as a UUID in the store.
"""

import json
import logging
import os
import uuid
from pathlib import Path
from typing import Dict, List, Optional

from boxsim.environment import DriverResolver
from boxsim.exceptions import DriverCreationError, FileAccessError

logger = logging.getLogger(__name__)


def _info(record: Dict) -> Dict:
    info = record.get('general_info')
    return info if isinstance(info, dict) else {}


def _text(record: Dict, key: str) -> str:
    """A general_info field as text; null or missing reads as empty."""
    value = _info(record).get(key)
    return value if isinstance(value, str) else str(value or '')


class DriverDatabase(DriverResolver):
    """In-memory driver database with search capabilities."""

    def __init__(self, directory: Optional[str] = None):
        self.drivers: Dict[str, Dict] = {}
        if directory:
            self.load_directory(directory)

    def load_directory(self, directory: str) -> int:
        """
        Load every `*.json` record below `directory`.

        Files that cannot be read or parsed are skipped with a warning.
        Returns the number of records loaded.
        """
        root = Path(directory)
        if not root.is_dir():
            raise FileAccessError(f"Driver directory does not exist: {directory}")

        loaded = 0
        for path in sorted(root.rglob('*.json')):
            try:
                record = json.loads(path.read_text(encoding='utf-8'))
            except (OSError, UnicodeDecodeError, json.JSONDecodeError):
                logger.warning("Skipping unreadable driver file %s", path, exc_info=True)
                continue
            if not isinstance(record, dict):
                logger.warning("Skipping %s: not a driver record", path)
                continue
            try:
                self.add_record(record)
            except DriverCreationError as exc:
                logger.warning("Skipping %s: %s", path, exc.message)
                continue
            loaded += 1

        logger.info("Loaded %d driver records from %s", loaded, directory)
        return loaded

    def add_record(self, record: Dict) -> Dict:
        """Add a record, assigning a UUID if it has none."""
        d = dict(record)
        if d.get('general_info') is not None and not isinstance(d['general_info'], dict):
            raise DriverCreationError("'general_info' must be an object", path='general_info')
        info = dict(_info(d))
        if not info.get('uuid'):
            info['uuid'] = str(uuid.uuid4())
        elif not isinstance(info['uuid'], str):
            raise DriverCreationError("Driver uuid must be a string", path='general_info.uuid')
        d['general_info'] = info
        self.drivers[info['uuid']] = d
        return d

    def search(
        self,
        query: Optional[str] = None,
        manufacturer: Optional[str] = None,
        speaker_type: Optional[str] = None,
    ) -> List[Dict]:
        """Search drivers by text query, manufacturer, or speaker type."""
        results = list(self.drivers.values())

        if manufacturer:
            results = [d for d in results if _text(d, 'manufacturer').lower() == manufacturer.lower()]

        if speaker_type:
            results = [d for d in results if _text(d, 'speaker_type').lower() == speaker_type.lower()]

        if query:
            q = query.lower()
            results = [
                d for d in results
                if q in _text(d, 'manufacturer').lower()
                or q in _text(d, 'brand').lower()
                or q in _text(d, 'model').lower()
                or q in _text(d, 'speaker_type').lower()
            ]

        return results

    def get_by_id(self, driver_id: str) -> Optional[Dict]:
        return self.drivers.get(driver_id)

    def get_by_model(self, manufacturer: str, model: str) -> Optional[Dict]:
        """Get a driver by manufacturer and model name."""
        for d in self.drivers.values():
            if (_text(d, 'manufacturer').lower() == manufacturer.lower()
                    and _text(d, 'model').lower() == model.lower()):
                return d
        return None

    def resolve(self, identifier: str) -> str:
        """Record text for a file path or a stored UUID."""
        if os.path.isfile(identifier):
            try:
                text = Path(identifier).read_text(encoding='utf-8')
            except OSError as exc:
                raise FileAccessError(f"Cannot read driver file {identifier}: {exc}") from exc
            logger.debug("Resolved %s as a file path", identifier)
            return text

        record = self.get_by_id(identifier)
        if record is not None:
            logger.debug("Resolved %s from the database", identifier)
            return json.dumps(record)

        raise FileAccessError(f"No driver file or database entry for '{identifier}'")

    def export_json(self) -> str:
        """Export all records as a JSON array."""
        return json.dumps(list(self.drivers.values()), indent=2)

    def import_json(self, json_str: str) -> int:
        """Import records from a JSON array; returns how many were added."""
        data = json.loads(json_str)
        for d in data:
            self.add_record(d)
        return len(data)

    @property
    def manufacturers(self) -> List[str]:
        return sorted(set(_text(d, 'manufacturer') for d in self.drivers.values()))

    @property
    def count(self) -> int:
        return len(self.drivers)
