"""Data models for recipe import."""

from dataclasses import asdict, dataclass
from enum import Enum


class ImportSource(str, Enum):
    """Provenance of an imported recipe."""

    SCHEMA_ORG = "schema.org"
    AI_EXTRACTION = "ai-extraction"


@dataclass(frozen=True)
class RecipeData:
    """
    A normalized recipe produced by the import pipeline.

    ingredients is a newline-delimited blob, one ingredient per line.
    tags holds unique values; order carries no meaning.
    """

    title: str
    ingredients: str
    instructions: str
    image_url: str | None = None
    tags: tuple[str, ...] = ()
    raw_html: str | None = None
    source_url: str | None = None

    @property
    def is_complete(self) -> bool:
        """Title, ingredients and instructions are all non-blank."""
        return bool(
            self.title.strip() and self.ingredients.strip() and self.instructions.strip()
        )

    def to_dict(self, include_raw_html: bool = False) -> dict:
        data = asdict(self)
        data["tags"] = list(self.tags)
        if not include_raw_html:
            data.pop("raw_html")
        return data


@dataclass(frozen=True)
class ImportResult:
    """Result of a successful URL import."""

    recipe: RecipeData
    source: ImportSource


def unique_tags(values) -> tuple[str, ...]:
    """Strip, drop blanks and non-strings, and deduplicate keeping first occurrence."""
    seen: dict[str, None] = {}
    for value in values:
        if not isinstance(value, str):
            continue
        tag = value.strip()
        if tag:
            seen.setdefault(tag, None)
    return tuple(seen)
