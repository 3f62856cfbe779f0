# articles/__init__.py
"""
Приложение для управления статьями и деревом категорий
"""
