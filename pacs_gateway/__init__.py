"""pacs-gateway: ISO 20022 pacs.008 / pacs.002 mapping service."""

__version__ = "1.0.0"
