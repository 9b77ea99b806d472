from restoreviews.models.restaurant import Restaurant
from restoreviews.models.user import User


def test_repr_shows_label_but_never_the_hash():
    user = User(username="alice", email="alice@example.com")
    user.password = "alicePass1"

    text = repr(user)

    assert "username='alice'" in text
    assert user.password_hash not in text


def test_restaurant_repr_uses_name():
    assert "name='Casa Lola'" in repr(Restaurant(name="Casa Lola"))
