"""Rooms app package.

Reference data for the hotel: the bookable rooms and the restriction
intervals (reservations and owner blocks) during which a room is not
available.
"""
