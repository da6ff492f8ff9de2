"""Notifications app package.

Turns confirmed bookings into outbound email messages. Messages are
queued to a single background worker so that mail latency or failure
never delays or fails the booking request that produced them.
"""
