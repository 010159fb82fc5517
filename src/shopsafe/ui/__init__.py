"""User interface for ShopSafe."""
