# tests/__init__.py
