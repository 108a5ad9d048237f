"""Version information for the ShopSmart setup tool."""

__version__ = "1.0.0"
