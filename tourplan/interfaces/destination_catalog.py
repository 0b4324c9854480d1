# interfaces/destination_catalog.py
"""
Destination Catalog for fallback itineraries
Read-only templates keyed by lower-cased destination:
- Day-by-day itinerary
- Accommodation and transportation notes
Loaded once from a JSON data file; swap the file with
DESTINATION_CATALOG_PATH to change the data without touching code.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Any, Optional, Tuple, Iterator, Mapping, Union
from loguru import logger

from ..config import settings
from ..schemas.plan_schemas import ItineraryDay


class CatalogError(Exception):
    """Raised when the catalog file is missing or malformed"""


@dataclass(frozen=True)
class DestinationTemplate:
    """Pre-authored itinerary bundle for one destination"""
    itinerary: Tuple[ItineraryDay, ...]
    accommodations: str
    transportation: str

    @property
    def day_count(self) -> int:
        return len(self.itinerary)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DestinationTemplate':
        return cls(
            itinerary=tuple(ItineraryDay(**day) for day in data["itinerary"]),
            accommodations=data["accommodations"],
            transportation=data["transportation"]
        )


class DestinationCatalog:
    """
    Immutable mapping of destination key -> DestinationTemplate.
    Iteration follows the insertion order of the source file.
    """

    def __init__(self, templates: Mapping[str, DestinationTemplate]):
        self._templates = MappingProxyType({key.lower(): value for key, value in templates.items()})

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DestinationCatalog':
        templates = {}
        for key, entry in data.items():
            try:
                templates[key] = DestinationTemplate.from_dict(entry)
            except (KeyError, TypeError, ValueError) as e:
                raise CatalogError(f"Invalid catalog entry '{key}': {e}") from e
        return cls(templates)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> 'DestinationCatalog':
        path = Path(path)
        try:
            with path.open(encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise CatalogError(f"Cannot load destination catalog {path}: {e}") from e

        if not isinstance(data, dict):
            raise CatalogError(f"Destination catalog {path} must be a JSON object")

        catalog = cls.from_dict(data)
        logger.info(f"Loaded {len(catalog)} destination templates from {path.name}")
        return catalog

    @property
    def templates(self) -> Mapping[str, DestinationTemplate]:
        return self._templates

    def match(self, destination: Optional[str]) -> Optional[DestinationTemplate]:
        """
        Find the template for a destination.
        The first key (in catalog order) contained in the lower-cased
        destination wins, so "Munnar, Kerala" resolves by substring.
        """
        target = (destination or "").lower()
        if not target:
            return None

        for key, template in self._templates.items():
            if key in target:
                return template
        return None

    def get(self, key: str) -> Optional[DestinationTemplate]:
        return self._templates.get(key.lower())

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._templates

    def __iter__(self) -> Iterator[str]:
        return iter(self._templates)

    def __len__(self) -> int:
        return len(self._templates)


# ============================================
# Global Instance
# ============================================

destination_catalog = DestinationCatalog.from_file(settings.DESTINATION_CATALOG_PATH)
