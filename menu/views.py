import logging

from django.conf import settings
from django.contrib.auth.decorators import login_required
from django.shortcuts import render, redirect
from django.utils.translation import get_language
from django.views.decorators.http import require_POST

# AWS wrapper clients
from aws_lib.dynamodb_client import DynamoDBClient
from aws_lib.s3_client import S3Client

from .cart import SessionCart
from .forms import MenuItemForm
from .management import MenuManagement
from .models import UserSession
from .notifications import Notifier
from .storefront import REMOTE_ERRORS, Storefront


# AWS client initialization
ddb = DynamoDBClient()     # DynamoDB wrapper
s3 = S3Client()            # S3 wrapper for menu images

logger = logging.getLogger(__name__)


def _storefront(request):
    return Storefront(ddb, Notifier(request), settings.MENU_PLACEHOLDER_IMAGE)


def _management(request):
    return MenuManagement(ddb, s3, UserSession.from_request(request), Notifier(request))


# storefront views
def storefront(request):
    """
    Shop grid of every available item with remaining stock.
    An empty menu renders an empty grid; a failed fetch renders an error block.
    """
    screen = _storefront(request)
    screen.load()

    return render(request, "menu/storefront.html", {
        "items": screen.items,
        "error": screen.error,
        "cart": SessionCart(request.session),
        "use_korean": (get_language() or "").startswith("ko"),
    })


@require_POST
def add_to_cart(request, item_id):
    """
    Put one of an item in the session cart. Nothing is reserved.
    A failed lookup is only logged; the storefront reports it after the redirect.
    """
    screen = _storefront(request)
    try:
        item = screen.fetch_item(item_id)
    except REMOTE_ERRORS:
        logger.exception("Error fetching menu item %s for the cart", item_id)
        return redirect("storefront")

    if item is None:
        screen.notify.error("This item is no longer available.")
    elif item.sold_out:
        screen.notify.error(f"{item.name} is sold out.")
    else:
        SessionCart(request.session).add(item)
        screen.notify.success(f"{item.name} added to cart")
    return redirect("storefront")


# vendor menu management views
def _render_management(request, screen, form):
    return render(request, "menu/management.html", {
        "items": screen.items,
        "form": form,
        "dialog_open": screen.dialog_open,
        "editing_item": screen.editing_item,
    })


@login_required
def vendor_menu(request):
    """Lists the vendor's items by category, with the add dialog closed."""
    screen = _management(request)
    screen.load()
    return _render_management(request, screen, MenuItemForm(initial=screen.form_data))


@login_required
@require_POST
def add_menu_item(request):
    """
    Creates a new item, uploading the optional image to S3 first.
    On failure the dialog is rendered again with the entered data.
    """
    screen = _management(request)
    screen.open_new()

    form = MenuItemForm(request.POST, request.FILES)
    if form.is_valid():
        if screen.save(form.cleaned_data, image=form.cleaned_data.get("image"), refresh=False):
            return redirect("vendor_menu")

    screen.load()
    return _render_management(request, screen, form)


@login_required
def edit_menu_item(request, item_id):
    """
    GET opens the edit dialog prefilled from the stored item.
    POST updates it, keeping the stored image unless a new one is uploaded.
    """
    screen = _management(request)
    if screen.begin_edit(item_id) is None:
        return redirect("vendor_menu")

    if request.method == "POST":
        form = MenuItemForm(request.POST, request.FILES)
        if form.is_valid():
            if screen.save(form.cleaned_data, image=form.cleaned_data.get("image"), refresh=False):
                return redirect("vendor_menu")
    else:
        form = MenuItemForm(initial=screen.form_data)

    screen.load()
    return _render_management(request, screen, form)


@login_required
@require_POST
def delete_menu_item(request, item_id):
    """Removes an item, then the list is fetched again."""
    screen = _management(request)
    screen.delete(item_id, refresh=False)
    return redirect("vendor_menu")
