"""Category registry: display name, icon and color for each category."""

from dataclasses import dataclass
from types import MappingProxyType

from src.models.enums import ExpenseCategory


@dataclass(frozen=True)
class CategoryDefinition:
    """Static display properties of a category."""

    id: str
    name: str
    icon: str
    color: str


CATEGORIES: MappingProxyType[str, CategoryDefinition] = MappingProxyType(
    {
        definition.id: definition
        for definition in (
            CategoryDefinition(ExpenseCategory.FOOD.value, "Food", "🍽️", "#60a5fa"),
            CategoryDefinition(ExpenseCategory.TRANSPORT.value, "Transport", "🚌", "#a78bfa"),
            CategoryDefinition(
                ExpenseCategory.ENTERTAINMENT.value, "Entertainment", "🎮", "#f472b6"
            ),
            CategoryDefinition(ExpenseCategory.UTILITIES.value, "Utilities", "💡", "#fbbf24"),
            CategoryDefinition(ExpenseCategory.HOUSING.value, "Housing", "🏠", "#818cf8"),
            CategoryDefinition(ExpenseCategory.GIFTS.value, "Gifts", "🎁", "#fb7185"),
            CategoryDefinition(ExpenseCategory.OTHER.value, "Other", "📦", "#94a3b8"),
        )
    }
)

DEFAULT_CATEGORY = CATEGORIES[ExpenseCategory.OTHER.value]


def get_category(category: str | None) -> CategoryDefinition:
    """Look up a category case-insensitively, falling back to "other"."""
    if not category:
        return DEFAULT_CATEGORY
    return CATEGORIES.get(category.strip().lower(), DEFAULT_CATEGORY)


def list_categories() -> list[CategoryDefinition]:
    """All categories in display order."""
    return list(CATEGORIES.values())
