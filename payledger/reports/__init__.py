"""Report generation for payledger."""

from payledger.reports.accounts import AccountsReport

__all__ = ["AccountsReport"]
