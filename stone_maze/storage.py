"""Persistence layer for routes found by the search."""

import csv
import json
from dataclasses import asdict, dataclass
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

from .position import Movement, parse_path
from .search import SearchResult


@dataclass
class SolutionRecord:
    """A route for one named maze, with how it was found."""
    name: str
    path: str
    success: bool
    distance: int
    generation: int
    variant: str
    recorded_at: str
    notes: str = ""

    def to_dict(self) -> Dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict) -> "SolutionRecord":
        return cls(**data)

    @property
    def movements(self) -> List[Movement]:
        return parse_path(self.path)

    def sort_key(self):
        """Smaller is better: successes first, then shorter routes or closer approaches."""
        if self.success:
            return (0, self.generation)
        return (1, self.distance)


class SolutionDatabase:
    """JSON-based storage for found routes, one best record per maze name."""

    def __init__(self, filepath: str = "solutions.json"):
        self.filepath = Path(filepath)
        self.records: List[SolutionRecord] = []
        self._load()

    def _load(self):
        if not self.filepath.exists():
            self.records = []
            return
        with open(self.filepath, "r") as f:
            data = json.load(f)
        self.records = [SolutionRecord.from_dict(r) for r in data.get("solutions", [])]

    def save(self):
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        data = {
            "version": "1.0",
            "updated_at": datetime.now().isoformat(),
            "solutions": [r.to_dict() for r in self.records],
        }
        with open(self.filepath, "w") as f:
            json.dump(data, f, indent=2)

    def add(self, name: str, result: SearchResult, variant: str, notes: str = "") -> SolutionRecord:
        """Record `result` for `name` unless an equal or better record already exists."""
        record = SolutionRecord(
            name=name,
            path=result.path_string(),
            success=result.success,
            distance=result.distance,
            generation=result.generation,
            variant=variant,
            recorded_at=datetime.now().isoformat(),
            notes=notes,
        )
        for i, existing in enumerate(self.records):
            if existing.name == name:
                if record.sort_key() < existing.sort_key():
                    self.records[i] = record
                    self.save()
                    return record
                return existing

        self.records.append(record)
        self.save()
        return record

    def get(self, name: str) -> Optional[SolutionRecord]:
        for r in self.records:
            if r.name == name:
                return r
        return None

    def best(self, top_n: int = 20) -> List[SolutionRecord]:
        return sorted(self.records, key=lambda r: (r.sort_key(), r.name))[:top_n]

    def remove(self, name: str) -> bool:
        for i, r in enumerate(self.records):
            if r.name == name:
                del self.records[i]
                self.save()
                return True
        return False

    def export_csv(self, filepath: str):
        with open(filepath, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(["name", "success", "moves", "distance", "variant", "recorded_at", "path"])
            for r in self.best(len(self.records)):
                writer.writerow([
                    r.name,
                    r.success,
                    len(r.movements),
                    r.distance,
                    r.variant,
                    r.recorded_at,
                    r.path,
                ])

    def __len__(self):
        return len(self.records)

    def __iter__(self):
        return iter(self.records)
