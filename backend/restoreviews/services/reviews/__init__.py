from .dto import ReviewIn, ReviewOut, ReviewUpdateIn
from .service import ReviewService

__all__ = ["ReviewIn", "ReviewOut", "ReviewService", "ReviewUpdateIn"]
