"""site-teardown - interactive, ordered teardown of a static-site AWS stack."""

__version__ = "0.1.0"
