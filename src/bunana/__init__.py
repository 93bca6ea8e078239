"""OSGi bundle analyzer: package import/export reports from bundle manifests."""

__version__ = "0.1.0"
