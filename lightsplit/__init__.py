"""lightsplit: reconcile parsed receipts and split bills to the exact cent."""

__version__ = "0.1.0"
