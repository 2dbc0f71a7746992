from decimal import Decimal

CART_SESSION_KEY = "cart"


class SessionCart:
    """
    Shopping cart kept in the user's session.

    Lines are stored as plain strings/ints so any session serializer can hold
    them: {item_id: {"name": ..., "price": "12.50", "quantity": 2}}.
    """

    def __init__(self, session):
        self.session = session
        self.lines = session.setdefault(CART_SESSION_KEY, {})

    def _save(self):
        self.session[CART_SESSION_KEY] = self.lines
        self.session.modified = True

    def add(self, item, quantity=1):
        line = self.lines.get(item.id)
        if line:
            line["quantity"] += quantity
        else:
            self.lines[item.id] = {
                "name": item.name,
                "price": str(item.price),
                "quantity": quantity,
            }
        self._save()
        return self.lines[item.id]

    def __iter__(self):
        for item_id, line in self.lines.items():
            yield dict(line, id=item_id, price=Decimal(line["price"]))

    def __len__(self):
        return sum(line["quantity"] for line in self.lines.values())

    @property
    def subtotal(self):
        return sum((Decimal(l["price"]) * l["quantity"] for l in self.lines.values()), Decimal(0))

    def clear(self):
        self.lines = {}
        self._save()
