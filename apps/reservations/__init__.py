"""Reservations app package.

This app encapsulates the booking workflow: the session-carried draft
reservation, availability checks against room restrictions, and the
atomic commit of a reservation together with its restriction row.
"""
