"""
Core Data Models for Pocket Ledger

DESIGN DECISION: We use Pydantic v2 models for every record that is
persisted. The same model validates input, serializes to the key-value
store and parses it back, so a saved collection always loads equal.

Expenses are immutable after creation. Categories are replaced wholesale
on update.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional, Union
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from pocket_ledger.models.period import local_day


# =============================================================================
# CATEGORIES
# =============================================================================

FALLBACK_CATEGORY_ID = "other"


class Category(BaseModel):
    """
    A user-visible bucket for expenses.

    Built-in categories use fixed lowercase ids; user-added ones get a
    UUID string. The icon is an opaque symbol name for the UI.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    id: str = Field(..., min_length=1, description="Stable category id")
    name: str = Field(..., description="Display label")
    icon: str = Field(default="shippingbox", description="Symbolic icon reference")


DEFAULT_CATEGORIES: tuple[Category, ...] = (
    Category(id="food", name="餐饮", icon="fork.knife"),
    Category(id="transport", name="交通", icon="car"),
    Category(id="entertainment", name="娱乐", icon="tv"),
    Category(id="shopping", name="购物", icon="bag"),
    Category(id="medical", name="医疗", icon="cross"),
    Category(id="gift", name="人情", icon="gift"),
    Category(id="bills", name="缴费", icon="lightbulb"),
    Category(id=FALLBACK_CATEGORY_ID, name="其他", icon="shippingbox"),
)

# Localized name -> id, used by the historical importer.
# "其他" is deliberately absent: unknown names map to "other" anyway.
CATEGORY_NAME_TO_ID: dict[str, str] = {
    cat.name: cat.id for cat in DEFAULT_CATEGORIES if cat.id != FALLBACK_CATEGORY_ID
}

BUILTIN_CATEGORY_NAMES: dict[str, str] = {cat.id: cat.name for cat in DEFAULT_CATEGORIES}


def default_categories() -> list[Category]:
    """Fresh copies of the built-in category set."""
    return [cat.model_copy() for cat in DEFAULT_CATEGORIES]


def new_category(name: str, icon: str = "shippingbox") -> Category:
    """Create a user-defined category with a fresh unique id."""
    return Category(id=str(uuid4()), name=name, icon=icon)


def fallback_category(categories: list[Category], category_id: str) -> Category:
    """
    Presentation for an expense whose category no longer exists.

    Uses the live "other" category when present, otherwise the built-in one.
    The dangling id is kept so callers can still group by it.
    """
    for cat in categories:
        if cat.id == FALLBACK_CATEGORY_ID:
            return Category(id=category_id, name=cat.name, icon=cat.icon)
    builtin = DEFAULT_CATEGORIES[-1]
    return Category(id=category_id, name=builtin.name, icon=builtin.icon)


# =============================================================================
# AMOUNTS
# =============================================================================

# Keeps every sum, average and percentage far inside Decimal's exponent range
MAX_AMOUNT = Decimal("1000000000000")


def parse_amount(value: Union[Decimal, int, float, str]) -> Optional[Decimal]:
    """
    Parse a money amount.

    Returns:
        The amount, or None if it is not a finite number within +/- MAX_AMOUNT
    """
    try:
        amount = Decimal(str(value).strip())
    except (ArithmeticError, ValueError):
        return None
    if not amount.is_finite() or amount.copy_abs() > MAX_AMOUNT:
        return None
    return amount


# =============================================================================
# EXPENSES
# =============================================================================

class Expense(BaseModel):
    """
    A single recorded outlay.

    The category is NOT checked against the live category set; it may point
    to a category that was deleted later. Lookups must handle that.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: UUID = Field(
        default_factory=uuid4,
        description="Unique expense id, never reused",
    )
    amount: Decimal = Field(
        ...,
        ge=-MAX_AMOUNT,
        le=MAX_AMOUNT,
        description="Amount in the user's currency",
    )
    description: str = Field(
        default="",
        description="Free-text label",
    )
    category: str = Field(
        default=FALLBACK_CATEGORY_ID,
        description="Category id",
    )
    date: datetime = Field(
        default_factory=datetime.now,
        description="When the expense happened",
    )

    @property
    def day(self):
        """Local calendar day of the expense."""
        return local_day(self.date)


def find_category(categories: list[Category], category_id: str) -> Optional[Category]:
    for cat in categories:
        if cat.id == category_id:
            return cat
    return None
