"""On-page SEO audit and scoring engine."""

__version__ = "1.0.0"
