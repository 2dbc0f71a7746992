"""tests/test_cart.py – session backed cart."""
from decimal import Decimal

from django.contrib.sessions.backends.signed_cookies import SessionStore

from menu.cart import SessionCart
from menu.models import StorefrontItem


def item(id="i1", name="Bibimbap", price="12.50"):
    return StorefrontItem(id=id, name=name, price=Decimal(price), image="/x.png")


class TestSessionCart:
    def test_add_and_count(self):
        session = SessionStore()
        cart = SessionCart(session)
        cart.add(item())
        cart.add(item())
        cart.add(item(id="i2", name="Mandu", price="6"))

        assert len(cart) == 3
        assert cart.subtotal == Decimal("31.00")
        assert session.modified is True

    def test_lines_survive_a_new_cart_object(self):
        session = SessionStore()
        SessionCart(session).add(item(), quantity=2)
        lines = list(SessionCart(session))
        assert lines == [{"id": "i1", "name": "Bibimbap", "price": Decimal("12.50"), "quantity": 2}]

    def test_clear(self):
        session = SessionStore()
        cart = SessionCart(session)
        cart.add(item())
        cart.clear()
        assert len(SessionCart(session)) == 0
        assert cart.subtotal == Decimal(0)
