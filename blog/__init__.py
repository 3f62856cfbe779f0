# blog/__init__.py
"""
Пакет настроек проекта
"""
