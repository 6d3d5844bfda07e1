from __future__ import annotations

"""
Category models for transaction classification.

Scope
- Pure Pydantic v2 models for categories and the fixed default set
- No I/O operations (handled by pocketledger.storage.category_store)

System categories are seeded on first run and can be renamed or recoloured
but never deleted. The is_system flag itself is frozen.
"""

from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pocketledger.model.transaction import TransactionType


class Category(BaseModel):
    """Category definition for transaction classification."""

    model_config = ConfigDict(validate_assignment=True)

    id: UUID = Field(default_factory=uuid4)
    name: str = Field(min_length=1, description="Display name, e.g. 'Food & Dining'")
    icon: str = Field(default="tag.fill", description="Symbol name used by the UI")
    color_hex: str = Field(default="95A5A6")
    applicable_types: frozenset[TransactionType] = Field(
        default=frozenset({TransactionType.expense}),
        description="Whether this category applies to income, expense, or both",
    )
    sort_order: int = 0
    is_system: bool = Field(default=False, frozen=True)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Category name cannot be blank")
        return value

    @field_validator("applicable_types")
    @classmethod
    def _require_types(cls, value: frozenset[TransactionType]) -> frozenset[TransactionType]:
        if not value:
            raise ValueError("A category must apply to at least one transaction type")
        return value

    def applies_to(self, transaction_type: TransactionType) -> bool:
        return transaction_type in self.applicable_types

    def to_row(self) -> dict:
        return {
            "id": str(self.id),
            "name": self.name,
            "icon": self.icon,
            "color_hex": self.color_hex,
            "applicable_types": ",".join(sorted(t.value for t in self.applicable_types)),
            "sort_order": self.sort_order,
            "is_system": int(self.is_system),
        }

    @classmethod
    def from_row(cls, row: dict) -> Category:
        types = frozenset(TransactionType(t) for t in row["applicable_types"].split(",") if t)
        return cls(
            id=UUID(row["id"]),
            name=row["name"],
            icon=row["icon"],
            color_hex=row["color_hex"],
            applicable_types=types,
            sort_order=row["sort_order"],
            is_system=bool(row["is_system"]),
        )


_EXPENSE = frozenset({TransactionType.expense})
_INCOME = frozenset({TransactionType.income})
_BOTH = frozenset({TransactionType.expense, TransactionType.income})

# (name, icon, color, types, sort_order)
DEFAULT_EXPENSE_CATEGORIES: list[tuple[str, str, str, frozenset[TransactionType], int]] = [
    ("Food & Dining", "fork.knife", "FF6B6B", _EXPENSE, 0),
    ("Transportation", "car.fill", "4ECDC4", _EXPENSE, 1),
    ("Shopping", "bag.fill", "9B59B6", _EXPENSE, 2),
    ("Entertainment", "gamecontroller.fill", "F39C12", _EXPENSE, 3),
    ("Bills & Utilities", "bolt.fill", "3498DB", _EXPENSE, 4),
    ("Health", "heart.fill", "E74C3C", _EXPENSE, 5),
    ("Education", "book.fill", "1ABC9C", _EXPENSE, 6),
    ("Other", "ellipsis.circle.fill", "95A5A6", _BOTH, 99),
]

DEFAULT_INCOME_CATEGORIES: list[tuple[str, str, str, frozenset[TransactionType], int]] = [
    ("Salary", "briefcase.fill", "00D09C", _INCOME, 0),
    ("Freelance", "laptopcomputer", "00B386", _INCOME, 1),
    ("Investments", "chart.line.uptrend.xyaxis", "2ECC71", _INCOME, 2),
    ("Gifts", "gift.fill", "E91E63", _INCOME, 3),
]


def default_categories() -> list[Category]:
    """Fresh system categories (new ids each call) for seeding an empty store."""
    return [
        Category(
            name=name,
            icon=icon,
            color_hex=color,
            applicable_types=types,
            sort_order=order,
            is_system=True,
        )
        for name, icon, color, types, order in DEFAULT_EXPENSE_CATEGORIES + DEFAULT_INCOME_CATEGORIES
    ]


__all__ = [
    "Category",
    "DEFAULT_EXPENSE_CATEGORIES",
    "DEFAULT_INCOME_CATEGORIES",
    "default_categories",
]
