import pytest

from restoreviews.models.review import Review
from restoreviews.services._shared.errors import NotFoundError
from restoreviews.services.restaurants import RestaurantIn, RestaurantService, RestaurantUpdateIn
from tests.factories.restaurant import RestaurantFactory
from tests.factories.review import ReviewFactory


@pytest.fixture()
def service() -> RestaurantService:
    return RestaurantService()


class TestRestaurantService:
    def test_create_starts_with_zero_average(self, session, service):
        out = service.create_restaurant(
            RestaurantIn(name="Bodega Sur", address="Calle Sol 3", phone_number="+34 600 111 222")
        )

        assert out.id is not None
        assert out.average_rating == 0.0

    def test_partial_update(self, session, service):
        restaurant = RestaurantFactory(name="Old Name")

        out = service.update_restaurant(restaurant.id, RestaurantUpdateIn(name="New Name"))

        assert out.name == "New Name"
        assert out.address == restaurant.address

    def test_update_missing(self, session, service):
        with pytest.raises(NotFoundError):
            service.update_restaurant(424242, RestaurantUpdateIn(name="Ghost"))

    def test_delete_cascades_reviews(self, session, service):
        review = ReviewFactory()
        restaurant_id = review.restaurant_id

        service.delete_restaurant(restaurant_id)

        assert session.query(Review).filter_by(restaurant_id=restaurant_id).count() == 0
        with pytest.raises(NotFoundError):
            service.get_restaurant(restaurant_id)

    def test_list_sorted_by_name(self, session, service):
        RestaurantFactory(name="Zeta")
        RestaurantFactory(name="Alfa")

        page = service.list_restaurants(page=1, take=10, sort=["name"])

        assert [r.name for r in page.items] == ["Alfa", "Zeta"]
