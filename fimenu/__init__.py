"""F&I product menu: catalog, URL state tokens and the admin/customer API."""

__version__ = "1.0.0"
