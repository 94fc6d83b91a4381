"""CV editor endpoint: profile and CV page configuration documents."""

__version__ = "1.0.0"
