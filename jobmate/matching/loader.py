"""Load requester, listing and match records from YAML or JSON files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from jobmate.matching.adapters import criteria_from_record
from jobmate.matching.models import MatchResult, RequesterCriteria


class RecordLoader:
    """Reads record files for the CLI.

    The file extension picks the parser; unknown extensions are sniffed,
    trying JSON first when the content looks like JSON.
    """

    def load_mapping(self, path: Path | str) -> dict[str, Any]:
        """Load a file whose top level is a mapping."""
        data = self._load(Path(path))
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"Record must be a mapping/dict: {path}")
        return data

    def load_list(self, path: Path | str) -> list[Any]:
        """Load a file whose top level is a list of records.

        A mapping with an ``items`` or ``listings`` key holding a list is also
        accepted.
        """
        data = self._load(Path(path))
        if data is None:
            return []
        if isinstance(data, dict):
            for key in ("items", "listings"):
                if isinstance(data.get(key), list):
                    return data[key]
        if not isinstance(data, list):
            raise ValueError(f"Records must be a list: {path}")
        return data

    def load_criteria(self, path: Path | str) -> RequesterCriteria:
        """Load requester criteria in either supported record shape."""
        return criteria_from_record(self.load_mapping(path))

    def load_match(self, path: Path | str) -> MatchResult:
        """Load a previously written match result."""
        data = self.load_mapping(path)
        try:
            return MatchResult.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid match result: {path}") from e

    def _load(self, path: Path) -> Any:
        if not path.exists():
            raise FileNotFoundError(f"Record file not found: {path}")

        suffix = path.suffix.lower()
        if suffix in {".yaml", ".yml"}:
            return self._load_yaml(path)
        if suffix == ".json":
            return self._load_json(path)
        return self._load_unknown(path)

    def _load_yaml(self, path: Path) -> Any:
        try:
            with path.open("r", encoding="utf-8") as f:
                return yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML record file: {path}") from e

    def _load_json(self, path: Path) -> Any:
        try:
            with path.open("r", encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON record file: {path}") from e

    def _load_unknown(self, path: Path) -> Any:
        raw = path.read_text(encoding="utf-8")
        raw_stripped = raw.lstrip()

        if raw_stripped.startswith("{") or raw_stripped.startswith("["):
            try:
                return json.loads(raw)
            except json.JSONDecodeError:
                pass

        try:
            return yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid record file format: {path}") from e
