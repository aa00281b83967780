"""folio: portfolio content API, CMS dashboard and public site."""

__version__ = "0.1.0"
