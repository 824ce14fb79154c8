"""PAE inventory service: stock reconstruction over the purchases movement log."""

__version__ = "1.0.0"
