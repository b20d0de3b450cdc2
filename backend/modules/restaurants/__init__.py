# backend/modules/restaurants/__init__.py
