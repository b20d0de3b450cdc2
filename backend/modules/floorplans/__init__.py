# backend/modules/floorplans/__init__.py
