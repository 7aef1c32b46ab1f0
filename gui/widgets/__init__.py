# gui/widgets/__init__.py
