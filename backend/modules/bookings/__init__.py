# backend/modules/bookings/__init__.py
