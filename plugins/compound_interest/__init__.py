"""Compound interest plugin manifest."""

manifest = {
    "title": "Compound Interest",
    "summary": "Project daily compounding of a principal with a day-by-day ledger.",
    "category": "Finance",
    "blueprint": "compound_interest",
    "icon": "img/GeneralUtilityTools_icon.png",
}

__all__ = ["manifest"]
