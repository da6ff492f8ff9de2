"""Login and logout for staff."""

from __future__ import annotations

import logging

from django.contrib import messages  # type: ignore
from django.contrib.auth import authenticate, login, logout  # type: ignore
from django.shortcuts import redirect, render  # type: ignore
from django.views import View  # type: ignore

from shared.application.forms import Form

logger = logging.getLogger(__name__)


class LoginView(View):
    template_name = "users/login.html"

    def get(self, request):
        return render(request, self.template_name, {"form": Form()})

    def post(self, request):
        form = Form(request.POST)
        form.required("email", "password")
        form.is_email("email")
        if not form.valid():
            return render(request, self.template_name, {"form": form})

        user = authenticate(request, email=form.value("email"), password=request.POST.get("password"))
        if user is None:
            logger.warning(f"Failed login for {form.value('email')}")
            messages.error(request, "Invalid login credentials")
            return render(request, self.template_name, {"form": form})

        # login() rotates the session key
        login(request, user)
        messages.success(request, "Logged in successfully!")
        return redirect("home")


class LogoutView(View):
    def get(self, request):
        # logout() flushes the session and issues a new key
        logout(request)
        return redirect("users:login")
