# gsi_orders/api/__init__.py
