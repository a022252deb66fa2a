"""
URL configuration for admin account endpoints.
"""

from django.urls import path

from api.v1.account import views

app_name = "account"

urlpatterns = [
    path("profile", views.ProfileView.as_view(), name="profile"),
    path("profile/setup-control", views.SetupControlView.as_view(), name="setup-control"),
]
