"""bpost tracker edge router: CORS proxy, social previews and static assets."""

__version__ = "1.0.0"
