# catalog/utils/__init__.py
