"""devutils — bootstrap and maintain developer machines."""

__version__ = "0.1.0"

PACKAGE_NAME = "devutils"
