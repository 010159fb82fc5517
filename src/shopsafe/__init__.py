"""ShopSafe - TikTok Shop compliance checks backed by a multimodal model."""

__version__ = "0.1.0"
