from .dto import RestaurantIn, RestaurantOut, RestaurantUpdateIn
from .service import RestaurantService

__all__ = ["RestaurantIn", "RestaurantOut", "RestaurantService", "RestaurantUpdateIn"]
