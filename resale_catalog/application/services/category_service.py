"""Category picker: walks the seeded category tree one level at a time."""

from typing import Dict, List, Optional

from resale_catalog.core.exceptions import ValidationException
from resale_catalog.domain.models.category import MAX_CATEGORY_LEVEL, Category
from resale_catalog.domain.schemas.category import CategoryOption
from resale_catalog.infrastructure.repositories.category_repository import SQLAlchemyCategoryRepository

# Leaf codes are only meaningful once the path is specific enough
CODE_MIN_LEVEL = 3


def top_level(repo: SQLAlchemyCategoryRepository) -> List[str]:
    return repo.top_level_names()


def _parents_for(level: int, path: Dict[str, str]) -> Dict[str, str]:
    parents = {}
    for parent_level in range(1, level):
        field = Category.level_field(parent_level)
        value = path.get(field)
        if not value:
            raise ValidationException(
                f"{field} is required to list level {level} categories",
                details={"level": level},
            )
        parents[field] = value
    return parents


def options_for_level(
    repo: SQLAlchemyCategoryRepository,
    level: int,
    path: Dict[str, str],
) -> List[CategoryOption]:
    """Distinct names at `level` under the given parent path, sorted by name."""
    if not 2 <= level <= MAX_CATEGORY_LEVEL:
        raise ValidationException(f"Category level must be between 2 and {MAX_CATEGORY_LEVEL}")

    rows = repo.rows_under(level, _parents_for(level, path))
    field = Category.level_field(level)
    next_field = Category.level_field(level + 1) if level < MAX_CATEGORY_LEVEL else None

    options: Dict[str, CategoryOption] = {}
    for row in rows:
        name = getattr(row, field)
        if not name or name in options:
            continue

        siblings = [r for r in rows if getattr(r, field) == name]
        has_children = bool(next_field) and any(getattr(r, next_field) for r in siblings)

        code: Optional[str] = None
        if not has_children and level >= CODE_MIN_LEVEL:
            leaf = next((r for r in siblings if not next_field or not getattr(r, next_field)), None)
            code = leaf.code if leaf else None

        options[name] = CategoryOption(name=name, code=code, has_children=has_children)

    return sorted(options.values(), key=lambda o: o.name)


def code_for_path(repo: SQLAlchemyCategoryRepository, path: Dict[str, str]) -> Optional[str]:
    if not path.get("category"):
        raise ValidationException("category is required")
    return repo.code_for_path(path)
