"""
Inventory app: the product catalog and its maintenance screens.
"""
