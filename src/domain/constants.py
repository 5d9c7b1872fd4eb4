"""Domain constants for budget calculations."""

from decimal import Decimal

AT_RISK_RATIO = Decimal("0.70")
WEEKS_PER_YEAR = Decimal("52")
MONTHS_PER_YEAR = Decimal("12")
DAYS_PER_WEEK = Decimal("7")

DEFAULT_CATEGORY_ICON = "square.grid.2x2"
DEFAULT_CATEGORY_COLOR = "#6C757D"
FALLBACK_CATEGORY_NAME = "General"
SHORTCUT_NOTE = "Added via Siri/Shortcuts"

DEFAULT_EXPENSE_CATEGORIES = (
    ("Housing", "house.fill", "#5E81F4"),
    ("Groceries", "cart.fill", "#4CAF50"),
    ("Dining Out", "fork.knife", "#FF9800"),
    ("Transport", "car.fill", "#2196F3"),
    ("Gas", "fuelpump.fill", "#FF5722"),
    ("Health", "heart.fill", "#E91E63"),
    ("Entertainment", "popcorn.fill", "#9C27B0"),
    ("Shopping", "bag.fill", "#00BCD4"),
    ("Education", "book.fill", "#607D8B"),
    ("Travel", "airplane", "#009688"),
    ("Utilities", "bolt.fill", "#FFC107"),
    ("Subscriptions", "repeat", "#795548"),
    ("Personal Care", "sparkles", "#FF6B6B"),
    ("Pets", "pawprint.fill", "#8BC34A"),
    ("Other", "square.grid.2x2", "#6C757D"),
)

DEFAULT_INCOME_CATEGORIES = (
    ("Salary", "briefcase.fill", "#4CAF50"),
    ("Freelance", "laptopcomputer", "#2196F3"),
    ("Investment", "chart.line.uptrend.xyaxis", "#9C27B0"),
    ("Gift", "gift.fill", "#E91E63"),
    ("Other Income", "plus.circle.fill", "#607D8B"),
)


__all__ = [
    "AT_RISK_RATIO",
    "WEEKS_PER_YEAR",
    "MONTHS_PER_YEAR",
    "DAYS_PER_WEEK",
    "DEFAULT_CATEGORY_ICON",
    "DEFAULT_CATEGORY_COLOR",
    "FALLBACK_CATEGORY_NAME",
    "SHORTCUT_NOTE",
    "DEFAULT_EXPENSE_CATEGORIES",
    "DEFAULT_INCOME_CATEGORIES",
]
