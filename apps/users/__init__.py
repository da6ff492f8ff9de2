"""Users app package.

Staff sign-in for the reservation back office. Accounts are regular
Django users; the password check itself is delegated to django.contrib.auth.
"""
