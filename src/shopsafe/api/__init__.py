"""HTTP API for ShopSafe."""
