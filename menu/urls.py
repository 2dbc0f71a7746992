from django.urls import path
from django.contrib.auth import views as auth_views
from . import views

urlpatterns = [
    # Storefront
    path('', views.storefront, name='storefront'),
    path('cart/add/<str:item_id>/', views.add_to_cart, name='add_to_cart'),

    # Auth
    path("login/", auth_views.LoginView.as_view(template_name="menu/login.html"), name="login"),
    path("logout/", auth_views.LogoutView.as_view(), name="logout"),

    # Vendor menu management
    path('vendor/menu/', views.vendor_menu, name='vendor_menu'),
    path('vendor/menu/add/', views.add_menu_item, name='add_menu_item'),
    path('vendor/menu/<str:item_id>/edit/', views.edit_menu_item, name='edit_menu_item'),
    path('vendor/menu/<str:item_id>/delete/', views.delete_menu_item, name='delete_menu_item'),
]
