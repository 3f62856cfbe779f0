# users/__init__.py
"""
Приложение пользователей (авторы и редакторы статей)
"""
