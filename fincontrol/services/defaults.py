"""
Default Seed Data

The categories every new dataset starts with. Ids are fixed ("1".."12")
so that snapshots exported from older installs keep pointing at them.
"""

from fincontrol.models.finance import Category, Dataset, TransactionType


_INCOME = TransactionType.INCOME
_EXPENSE = TransactionType.EXPENSE

# (id, name, color, icon, type)
DEFAULT_CATEGORY_ROWS = [
    # Income
    ("1", "Salário", "#10b981", "Briefcase", _INCOME),
    ("2", "Freelance", "#3b82f6", "Laptop", _INCOME),
    ("3", "Investimentos", "#8b5cf6", "TrendingUp", _INCOME),
    ("4", "Outros", "#6b7280", "Plus", _INCOME),
    # Expense
    ("5", "Alimentação", "#ef4444", "UtensilsCrossed", _EXPENSE),
    ("6", "Transporte", "#f59e0b", "Car", _EXPENSE),
    ("7", "Moradia", "#ec4899", "Home", _EXPENSE),
    ("8", "Saúde", "#06b6d4", "Heart", _EXPENSE),
    ("9", "Educação", "#8b5cf6", "GraduationCap", _EXPENSE),
    ("10", "Lazer", "#14b8a6", "Gamepad2", _EXPENSE),
    ("11", "Compras", "#f97316", "ShoppingBag", _EXPENSE),
    ("12", "Contas", "#64748b", "FileText", _EXPENSE),
]


def default_categories() -> list[Category]:
    """Fresh copies of the seed categories."""
    return [
        Category(id=id_, name=name, color=color, icon=icon, type=type_)
        for id_, name, color, icon, type_ in DEFAULT_CATEGORY_ROWS
    ]


def seed_dataset() -> Dataset:
    """A new dataset: default categories and no transactions."""
    return Dataset(transactions=[], categories=default_categories())
