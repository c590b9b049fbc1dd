"""UX4 Tools — install, scaffold, build and test UX4 applications."""

__version__ = "2.1.0"
