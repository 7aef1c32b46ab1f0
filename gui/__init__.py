# gui/__init__.py
