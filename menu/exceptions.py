class MenuError(Exception):
    """Base class for menu screen failures."""


class VendorNotFound(MenuError):
    """No vendor row is tied to the signed in user."""

    def __init__(self, user_id):
        super().__init__(f"Vendor not found for user {user_id}")
        self.user_id = user_id


class MenuItemNotFound(MenuError):
    def __init__(self, item_id):
        super().__init__(f"Menu item {item_id} not found")
        self.item_id = item_id


class PriceParseError(ValueError):
    """Price text that is not a finite, non-negative decimal number."""

    def __init__(self, text):
        super().__init__(f"Invalid price: {text!r}")
        self.text = text
