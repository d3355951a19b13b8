"""
Derived Result Models

Everything in this module is computed from the store on demand and never
persisted: day groups, summary cards, category breakdowns, trend
comparisons, import and navigation outcomes, and validation results.
"""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from pocket_ledger.models.expense import Expense
from pocket_ledger.models.period import Period


def round_half_up(value: Decimal) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


# =============================================================================
# AGGREGATION
# =============================================================================

class DayGroup(BaseModel):
    """All expenses of one local calendar day."""
    model_config = ConfigDict(frozen=True)

    label: str = Field(..., description="Display label, e.g. '6月15日 星期日'")
    day: date
    expenses: list[Expense] = Field(default_factory=list)
    amount: Decimal = Field(
        default=Decimal("0"),
        description="Exact sum of the day's amounts",
    )

    @property
    def total(self) -> int:
        """Integer-rounded day total, as shown in the day header."""
        return round_half_up(self.amount)


# =============================================================================
# STATISTICS
# =============================================================================

class SummaryStats(BaseModel):
    """Summary card for one period."""

    period: Period
    total: Decimal
    record_count: int = Field(ge=0)
    daily_average: Decimal
    average_per_record: Decimal
    budget: Decimal
    budget_used: float = Field(
        ...,
        description="Percentage of the budget spent (0 when budget is 0)",
    )

    @property
    def remaining(self) -> Decimal:
        return self.budget - self.total

    @property
    def over_budget(self) -> bool:
        return self.total > self.budget


class CategoryStat(BaseModel):
    """
    One row of a category breakdown.

    Percentages are rounded independently per row, so a breakdown does not
    always add up to exactly 100.
    """

    category_id: str
    name: str
    icon: str
    amount: Decimal
    record_count: int = Field(ge=0)
    percentage: int = Field(..., ge=0, le=100)
    is_fallback: bool = Field(
        default=False,
        description="True when the category no longer exists",
    )


class PeriodChange(BaseModel):
    """Change of the current period total against a comparison base."""

    current: Decimal
    previous: Decimal
    change_percent: float = Field(
        ...,
        description="Signed percent change; 0 when the base is 0",
    )

    @property
    def is_increase(self) -> bool:
        return self.change_percent > 0

    @property
    def magnitude(self) -> float:
        return abs(self.change_percent)


class TrendComparison(BaseModel):
    """
    Previous-period and year-over-year comparison for one period.

    A comparison period is None when it would fall outside the calendar;
    its base is then 0.
    """

    period: Period
    previous_period: Optional[Period] = None
    year_ago_period: Optional[Period] = None
    period_over_period: PeriodChange
    year_over_year: PeriodChange


# =============================================================================
# IMPORT / NAVIGATION / CHANGE NOTIFICATION
# =============================================================================

class ImportResult(BaseModel):
    """
    Outcome of parsing a historical import.

    `skipped_line_numbers` lets callers tell an empty file apart from a file
    whose every line was malformed.
    """

    imported: list[Expense] = Field(default_factory=list)
    skipped_line_numbers: list[int] = Field(default_factory=list)

    @property
    def imported_count(self) -> int:
        return len(self.imported)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped_line_numbers)

    def summary(self) -> str:
        """User-facing summary of the import."""
        message = f"成功导入 {self.imported_count} 条记录"
        if self.skipped_line_numbers:
            lines = ", ".join(str(n) for n in self.skipped_line_numbers)
            message += f"，跳过 {self.skipped_count} 行 (第 {lines} 行)"
        return message


class NavigationResult(BaseModel):
    """Outcome of a previous/next/go-to request."""

    moved: bool
    period: Period = Field(..., description="Selected period after the request")
    message: Optional[str] = Field(
        default=None,
        description="Boundary message when the move was rejected",
    )


class StoreChange(BaseModel):
    """Notification sent to store listeners after every mutation."""

    kind: str = Field(..., description="e.g. 'expense_added', 'budget_updated'")
    generation: int = Field(ge=0)


# =============================================================================
# VALIDATION
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue",
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_format', 'suspicious_value')",
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue",
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity",
    )


class ValidationResult(BaseModel):
    """Result of validating manual expense input."""

    issues: list[ValidationIssue] = Field(default_factory=list)
    amount: Optional[Decimal] = Field(
        default=None,
        description="Parsed amount when the amount text was numeric",
    )

    @property
    def has_errors(self) -> bool:
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def is_valid(self) -> bool:
        return not self.has_errors

    @property
    def error_count(self) -> int:
        return sum(1 for issue in self.issues if issue.severity == "error")
