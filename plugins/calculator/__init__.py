"""Calculator plugin manifest."""

manifest = {
    "title": "Calculator",
    "summary": "Keypad-driven scientific calculator with chained results and a short history.",
    "category": "General Utilities",
    "blueprint": "calculator",
    "icon": "img/GeneralUtilityTools_icon.png",
}

__all__ = ["manifest"]
