# catalog/__init__.py
"""Category tree and product variant matrix tools for the shop admin"""
