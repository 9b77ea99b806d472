import pytest

from restoreviews.repositories.restaurant import RestaurantRepository
from restoreviews.repositories.review import ReviewRepository
from tests.factories.restaurant import RestaurantFactory
from tests.factories.review import ReviewFactory


class TestRestaurantRepository:
    def test_refresh_average_rating(self, session):
        restaurant = RestaurantFactory()
        for rating in (5.0, 4.0, 4.0):
            ReviewFactory(restaurant=restaurant, rating=rating)
        repo = RestaurantRepository(session=session)

        assert repo.refresh_average_rating(restaurant) == pytest.approx(4.33)
        assert restaurant.average_rating == pytest.approx(4.33)

    def test_refresh_without_reviews_is_zero(self, session):
        restaurant = RestaurantFactory(average_rating=3.0)
        repo = RestaurantRepository(session=session)

        assert repo.refresh_average_rating(restaurant) == 0.0

    def test_sort_by_average_rating_desc(self, session):
        low = RestaurantFactory(average_rating=2.0)
        high = RestaurantFactory(average_rating=4.5)
        repo = RestaurantRepository(session=session)

        page = repo.paginate(page=1, take=10, sort=["-average_rating"])

        assert [r.id for r in page.items] == [high.id, low.id]


class TestReviewRepository:
    def test_filter_by_restaurant(self, session):
        target = RestaurantFactory()
        mine = ReviewFactory(restaurant=target)
        ReviewFactory()
        repo = ReviewRepository(session=session)

        page = repo.paginate(page=1, take=10, filters={"restaurant_id": target.id})

        assert [r.id for r in page.items] == [mine.id]
        assert page.total_count == 1

    def test_exists_with_filters(self, session):
        review = ReviewFactory()
        repo = ReviewRepository(session=session)

        assert repo.exists(user_id=review.user_id)
        assert not repo.exists(user_id=review.user_id + 1000)
