# iqs/tests/__init__.py
