from .user import User
from .expense import Expense
from .budget import Budget
from .activity import Activity

__all__ = ["User", "Expense", "Budget", "Activity"]
