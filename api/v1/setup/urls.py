"""
URL configuration for account setup endpoints.
"""

from django.urls import path

from api.v1.setup import views

app_name = "setup"

urlpatterns = [
    path("setup/access", views.SetupAccessView.as_view(), name="access"),
    path("setup", views.SetupView.as_view(), name="create-admin"),
]
