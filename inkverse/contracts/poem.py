#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Poem Collection Contract

Defines the snapshot of works handed to the export pipeline.
The persistence layer stores it as a JSON array of poems (poems.json);
keys keep their camelCase spelling on the wire.

Version: 1.0.0
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple, Union
from collections import Counter
from enum import Enum
from pathlib import Path

from .base import BaseContract, ContractMetadata, ContractValidationError


class LayoutMode(Enum):
    """Declared text-flow orientation of a work"""
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


class ThemeStyle(Enum):
    """Cosmetic palette selector"""
    CLASSIC = "classic"  # Ink on paper
    DARK = "dark"        # White on charcoal
    NATURE = "nature"    # Earthy tones


def _has_surrogate(text: str) -> bool:
    return any("\ud800" <= ch <= "\udfff" for ch in text)


def _parse_enum(enum_cls, value: Any, field_name: str, default):
    if value is None or value == "":
        return default
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ContractValidationError([f"{field_name}: unknown value {value!r} (expected one of {allowed})"])


@dataclass
class PoemAnalysis:
    """AI appreciation attached by the editor; carried, never rendered"""
    mood: str = ""
    commentary: str = ""
    suggested_tags: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            "mood": self.mood,
            "commentary": self.commentary,
            "suggestedTags": list(self.suggested_tags),
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'PoemAnalysis':
        return cls(
            mood=data.get("mood", ""),
            commentary=data.get("commentary", ""),
            suggested_tags=list(data.get("suggestedTags", [])),
        )


@dataclass
class PoemRecord:
    """One work of the collection"""
    id: str
    title: str = ""
    author: str = ""
    content: str = ""
    image_url: Optional[str] = None  # inline data URI payload
    layout: LayoutMode = LayoutMode.VERTICAL
    theme: ThemeStyle = ThemeStyle.CLASSIC
    date_created: int = 0  # ms since epoch
    analysis: Optional[PoemAnalysis] = None

    @property
    def has_image(self) -> bool:
        return bool(self.image_url)

    @property
    def lines(self) -> List[str]:
        """Body lines exactly as written"""
        return self.content.split("\n")

    def to_dict(self) -> Dict:
        data = {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "content": self.content,
            "layout": self.layout.value,
            "theme": self.theme.value,
            "dateCreated": self.date_created,
        }
        if self.image_url:
            data["imageUrl"] = self.image_url
        if self.analysis is not None:
            data["analysis"] = self.analysis.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: Dict) -> 'PoemRecord':
        analysis = data.get("analysis")
        return cls(
            id=str(data.get("id", "")),
            title=data.get("title") or "",
            author=data.get("author") or "",
            content=data.get("content") or "",
            image_url=data.get("imageUrl") or None,
            layout=_parse_enum(LayoutMode, data.get("layout"), "layout", LayoutMode.VERTICAL),
            theme=_parse_enum(ThemeStyle, data.get("theme"), "theme", ThemeStyle.CLASSIC),
            date_created=int(data.get("dateCreated") or 0),
            analysis=PoemAnalysis.from_dict(analysis) if analysis else None,
        )


class PoemCollection(BaseContract):
    """
    Ordered, immutable-per-export sequence of works.

    Order is presentation order, reading order and table-of-contents
    order; nothing downstream re-sorts it.

    Usage:
        collection = PoemCollection.from_json(path.read_text("utf-8"))
        collection.assert_valid()
        for index, record in enumerate(collection):
            ...
    """

    def __init__(
        self,
        records: Sequence[PoemRecord] = (),
        metadata: Optional[ContractMetadata] = None,
    ):
        self._records: Tuple[PoemRecord, ...] = tuple(records)
        self._metadata = metadata or ContractMetadata(source="poems.json")

    @property
    def metadata(self) -> ContractMetadata:
        return self._metadata

    @property
    def records(self) -> Tuple[PoemRecord, ...]:
        return self._records

    def __iter__(self) -> Iterator[PoemRecord]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __getitem__(self, index: int) -> PoemRecord:
        return self._records[index]

    def to_dict(self) -> List[Dict]:
        return [record.to_dict() for record in self._records]

    @classmethod
    def from_dict(cls, data: Union[List, Dict]) -> 'PoemCollection':
        """Accept the bare poems.json array or a {"poems": [...]} wrapper"""
        if isinstance(data, dict):
            data = data.get("poems", [])
        if not isinstance(data, list):
            raise ContractValidationError([f"expected a list of poems, got {type(data).__name__}"])
        return cls([PoemRecord.from_dict(item) for item in data])

    def validate(self) -> List[str]:
        errors = []

        for index, record in enumerate(self._records):
            if not record.id:
                errors.append(f"poem #{index + 1}: missing id")
            for field_name in ("id", "title", "author", "content", "image_url"):
                if _has_surrogate(getattr(record, field_name) or ""):
                    errors.append(f"poem #{index + 1}: {field_name} contains an unpaired surrogate")

        counts = Counter(record.id for record in self._records if record.id)
        for poem_id, count in counts.items():
            if count > 1:
                errors.append(f"duplicate poem id {poem_id!r} ({count} occurrences)")

        return errors


def load_collection(path: Union[str, Path]) -> PoemCollection:
    """Read a poems.json file written by the persistence layer"""
    text = Path(path).read_text(encoding="utf-8")
    return PoemCollection.from_json(text or "[]")
