"""
Vendor menu administration.

MenuManagement holds the state of the admin screen for one request: the
vendor's items, whether the add/edit dialog is open, which item is being
edited and the form contents. Every remote failure is caught here, logged and
turned into one generic notification; nothing is retried.
"""
import logging
import uuid
from decimal import DecimalException

from botocore.exceptions import BotoCoreError, ClientError

from aws_config import MENU_IMAGES_BUCKET, MENU_ITEMS_TABLE, VENDORS_TABLE
from aws_lib.exceptions import ConditionFailed
from .exceptions import MenuError, PriceParseError, VendorNotFound, MenuItemNotFound
from .models import MenuItem, parse_price

logger = logging.getLogger(__name__)

# DecimalException: boto3's serializer rejects numbers DynamoDB cannot hold
SCREEN_ERRORS = (ClientError, BotoCoreError, MenuError, PriceParseError, DecimalException)

LOAD_FAILED = "Failed to load menu items"
LOAD_ITEM_FAILED = "Failed to load menu item"
SAVE_FAILED = "Failed to save menu item"
SAVE_STALE = "This menu item was changed by someone else. Reload it and try again."
DELETE_FAILED = "Failed to delete menu item"

EMPTY_FORM = {
    "name": "",
    "name_ko": "",
    "description": "",
    "description_ko": "",
    "price": "",
    "category": "",
    "is_available": True,
    "quantity": None,
    "version": None,
}


class MenuManagement:
    def __init__(self, ddb, s3, session, notify, bucket=MENU_IMAGES_BUCKET):
        self.ddb = ddb
        self.s3 = s3
        self.session = session
        self.notify = notify
        self.bucket = bucket

        self.items = []
        self.loading = True
        self.dialog_open = False
        self.editing_item = None
        self.selected_image = None
        self.form_data = dict(EMPTY_FORM)

    def _resolve_vendor(self):
        vendor = self.ddb.first(VENDORS_TABLE, {"user_id": self.session.user_id})
        if not vendor:
            raise VendorNotFound(self.session.user_id)
        return vendor

    def load(self):
        """Fetch the signed in vendor's items, ordered by category."""
        try:
            vendor = self._resolve_vendor()
            records = self.ddb.select(
                MENU_ITEMS_TABLE, {"vendor_id": vendor["id"]}, order_by="category"
            )
            self.items = [MenuItem.from_record(r) for r in records]
        except SCREEN_ERRORS:
            logger.exception("Error loading menu items for user %s", self.session.user_id)
            self.notify.error(LOAD_FAILED)
        finally:
            self.loading = False
        return self.items

    def reset_form(self):
        self.form_data = dict(EMPTY_FORM)

    def open_new(self):
        self.editing_item = None
        self.selected_image = None
        self.reset_form()
        self.dialog_open = True

    def edit(self, item):
        self.editing_item = item
        self.form_data = item.to_form_data()
        self.dialog_open = True

    def begin_edit(self, item_id):
        """Fetch one of the vendor's items and open it for editing."""
        try:
            vendor = self._resolve_vendor()
            record = self.ddb.get(MENU_ITEMS_TABLE, {"id": item_id})
            if not record or record.get("vendor_id") != vendor["id"]:
                raise MenuItemNotFound(item_id)
        except SCREEN_ERRORS:
            logger.exception("Error loading menu item %s", item_id)
            self.notify.error(LOAD_ITEM_FAILED)
            return None
        item = MenuItem.from_record(record)
        self.edit(item)
        return item

    def _upload_image(self, upload):
        # random name, collisions are not retried
        ext = upload.name.split(".")[-1]
        key = f"{uuid.uuid4()}.{ext}"
        self.s3.upload_fileobj(
            self.bucket, key, upload, content_type=getattr(upload, "content_type", None)
        )
        return key

    def _row(self, vendor_id):
        data = self.form_data
        return {
            "vendor_id": vendor_id,
            "name": data["name"],
            "name_ko": data.get("name_ko") or None,
            "description": data.get("description") or None,
            "description_ko": data.get("description_ko") or None,
            "price": parse_price(data["price"]),
            "category": data["category"],
            "is_available": bool(data.get("is_available")),
            "quantity": data.get("quantity"),
        }

    def save(self, form_data, image=None, refresh=True):
        """
        Insert a new item or update the one being edited.

        Returns True on success. On failure the dialog stays open and
        ``form_data`` keeps what was entered.
        """
        self.form_data = {k: v for k, v in form_data.items() if k != "image"}
        if image is not None:
            self.selected_image = image
        editing = self.editing_item
        uploaded_key = None

        try:
            vendor = self._resolve_vendor()
            row = self._row(vendor["id"])

            image_url = editing.image if editing else None
            if self.selected_image:
                uploaded_key = self._upload_image(self.selected_image)
                image_url = self.s3.public_url(self.bucket, uploaded_key)
            row["image"] = image_url

            if editing:
                expected_version = self.form_data.get("version", editing.version)
                row["version"] = (expected_version or 0) + 1
                self.ddb.update(
                    MENU_ITEMS_TABLE, {"id": editing.id}, row,
                    expected={"version": expected_version},
                )
            else:
                row["id"] = str(uuid.uuid4())
                row["version"] = 1
                self.ddb.insert(MENU_ITEMS_TABLE, row)
        except ConditionFailed:
            logger.warning("Stale update rejected for menu item %s", editing and editing.id)
            self._log_orphan(uploaded_key)
            self.notify.error(SAVE_STALE)
            return False
        except SCREEN_ERRORS:
            logger.exception("Error saving menu item")
            self._log_orphan(uploaded_key)
            self.notify.error(SAVE_FAILED)
            return False

        self.notify.success(f"Menu item {'updated' if editing else 'added'} successfully")
        self.dialog_open = False
        self.editing_item = None
        self.selected_image = None
        self.reset_form()
        if refresh:
            self.load()
        return True

    def _log_orphan(self, key):
        if key:
            logger.warning("Uploaded image %s/%s is not referenced by any item", self.bucket, key)

    def delete(self, item_id, refresh=True):
        """Delete one of the vendor's items; other vendors' items are refused."""
        try:
            vendor = self._resolve_vendor()
            self.ddb.delete(
                MENU_ITEMS_TABLE, {"id": item_id}, expected={"vendor_id": vendor["id"]}
            )
        except (ConditionFailed,) + SCREEN_ERRORS:
            logger.exception("Error deleting menu item %s", item_id)
            self.notify.error(DELETE_FAILED)
            return False

        self.notify.success("Menu item deleted successfully")
        if refresh:
            self.load()
        return True
