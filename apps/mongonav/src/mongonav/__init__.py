"""mongonav - browse a MongoDB server like a filesystem."""

__version__ = "0.1.0"
