from stockpulse.models.saved_stock import SavedStock, UserStock
from stockpulse.models.user import User

__all__ = [
    "SavedStock",
    "User",
    "UserStock",
]
