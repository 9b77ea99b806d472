import pytest
from sqlalchemy import select

from restoreviews.models.restaurant import Restaurant
from restoreviews.uow.sqlalchemy_uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork
from tests.factories.restaurant import RestaurantFactory


def _names(session) -> list[str]:
    return list(session.execute(select(Restaurant.name)).scalars())


class TestReadWriteUnitOfWork:
    def test_commits_on_success(self, session):
        with SQLAlchemyUnitOfWork() as uow:
            uow.restaurants.add(Restaurant(name="Committed", address="A 1", phone_number="1"))

        assert "Committed" in _names(session)

    def test_rolls_back_on_error(self, session):
        with pytest.raises(RuntimeError):
            with SQLAlchemyUnitOfWork() as uow:
                uow.restaurants.add(Restaurant(name="Discarded", address="A 1", phone_number="1"))
                raise RuntimeError("boom")

        assert "Discarded" not in _names(session)

    def test_repositories_share_the_session(self, session):
        with SQLAlchemyUnitOfWork() as uow:
            assert uow.users.session is uow.restaurants.session is uow.reviews.session


class TestReadOnlyUnitOfWork:
    def test_reads_are_allowed(self, session):
        restaurant = RestaurantFactory()

        with SQLAlchemyReadOnlyUnitOfWork() as uow:
            assert uow.restaurants.get(restaurant.id) is not None

    def test_flush_with_changes_is_blocked(self, session):
        restaurant = RestaurantFactory(name="Original")

        with pytest.raises(RuntimeError, match="Read-only"):
            with SQLAlchemyReadOnlyUnitOfWork() as uow:
                row = uow.restaurants.get(restaurant.id)
                row.name = "Changed"
                uow.session.flush()

    def test_commit_is_refused(self, session):
        with pytest.raises(RuntimeError):
            with SQLAlchemyReadOnlyUnitOfWork() as uow:
                uow.commit()

    def test_guard_is_removed_on_exit(self, session):
        with SQLAlchemyReadOnlyUnitOfWork():
            pass

        with SQLAlchemyUnitOfWork() as uow:
            uow.restaurants.add(Restaurant(name="After RO", address="A 1", phone_number="1"))

        assert "After RO" in _names(session)
