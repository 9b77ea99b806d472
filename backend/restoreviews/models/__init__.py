from restoreviews.models.base import ModelValidationError
from restoreviews.models.restaurant import Restaurant
from restoreviews.models.review import Review
from restoreviews.models.user import User

__all__ = [
    "ModelValidationError",
    "Restaurant",
    "Review",
    "User",
]
