"""
Manual Entry Validation

Checks what the user typed into the add-expense form BEFORE anything
reaches the store. A rejected entry creates no record and triggers no write.

Checks:
- Description present (error)
- Amount present, numeric and at most MAX_AMOUNT (error)
- Amount greater than zero (warning: stored as typed, but almost
  certainly a mistake)

IMPORTANT: Validation NEVER silently fixes issues.
It reports them so the form can show them.
"""

from decimal import Decimal, InvalidOperation
from typing import Optional

from pocket_ledger.models import MAX_AMOUNT, ValidationIssue, ValidationResult


class ExpenseInputValidator:
    """Validates raw add-expense form input."""

    def _parse_amount(
        self,
        amount_text: str,
    ) -> tuple[Optional[Decimal], list[ValidationIssue]]:
        text = (amount_text or "").strip()
        if not text:
            return None, [ValidationIssue(
                field="amount",
                issue_type="missing",
                message="请输入金额",
                severity="error",
            )]

        try:
            amount = Decimal(text)
        except InvalidOperation:
            amount = None
        if amount is None or not amount.is_finite():
            return None, [ValidationIssue(
                field="amount",
                issue_type="invalid_format",
                message=f"金额格式不正确: {text}",
                severity="error",
            )]

        if amount.copy_abs() > MAX_AMOUNT:
            return None, [ValidationIssue(
                field="amount",
                issue_type="out_of_range",
                message="金额过大",
                severity="error",
            )]

        issues = []
        if amount <= 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="suspicious_value",
                message="金额应大于 0",
                severity="warning",
            ))
        return amount, issues

    def validate(self, amount_text: str, description: str) -> ValidationResult:
        """
        Validate one form submission.

        Args:
            amount_text: Amount exactly as typed
            description: Description as typed

        Returns:
            ValidationResult; `amount` is set whenever the text was numeric
        """
        amount, issues = self._parse_amount(amount_text)

        if not (description or "").strip():
            issues.append(ValidationIssue(
                field="description",
                issue_type="missing",
                message="请输入描述",
                severity="error",
            ))

        return ValidationResult(issues=issues, amount=amount)
