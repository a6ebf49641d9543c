"""Package version, also reported in the X-Contentful-User-Agent signature."""

__version__ = "0.1.0"
