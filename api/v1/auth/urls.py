"""
URL configuration for admin login endpoints.
"""

from django.urls import path

from api.v1.auth import views

app_name = "auth"

urlpatterns = [
    path("request-code", views.RequestCodeView.as_view(), name="request-code"),
    path("resend-code", views.ResendCodeView.as_view(), name="resend-code"),
    path("verify-code", views.VerifyCodeView.as_view(), name="verify-code"),
    path("logout", views.LogoutView.as_view(), name="logout"),
    path("session", views.SessionView.as_view(), name="session"),
]
