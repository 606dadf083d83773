"""Centralized configuration settings."""
from __future__ import annotations

import os
from dataclasses import dataclass, field


@dataclass
class FetcherSettings:
    """Settings for the HTML fetcher."""
    request_timeout: int = 15
    max_response_size: int = 10 * 1024 * 1024  # 10 MB
    max_redirects: int = 5
    user_agent: str = "Mozilla/5.0 (compatible; SeoAuditorBot/1.0)"


@dataclass
class SeoSettings:
    """Thresholds for metadata and heading checks."""
    title_min_length: int = 30
    title_max_length: int = 60

    description_min_length: int = 70
    description_max_length: int = 160

    h1_min_length: int = 20
    h1_max_length: int = 70

    max_url_length: int = 75


@dataclass
class ContentSettings:
    """Thresholds for content and readability checks."""
    min_content_words: int = 300  # Thin content threshold
    min_text_to_html_ratio: float = 10.0  # percent
    min_paragraph_share: float = 50.0  # percent

    # Reading ease bands
    reading_ease_good: float = 50.0
    reading_ease_fair: float = 30.0

    keyword_limit: int = 10
    keyword_min_length: int = 4
    keyword_stuffing_density: float = 5.0  # percent

    # False switches to the constant 1.5 syllables/word approximation
    estimate_syllables: bool = True


@dataclass
class PerformanceSettings:
    """Thresholds for performance proxies."""
    max_resources: int = 50
    max_render_blocking: int = 3
    page_size_good_kb: int = 100
    page_size_warning_kb: int = 300
    load_time_good: float = 2.5  # seconds
    load_time_warning: float = 5.0

    max_inline_styles: int = 10
    max_dom_nodes: int = 1500


@dataclass
class GradeSettings:
    """Letter grade thresholds for the overall score."""
    grade_a_threshold: int = 90
    grade_b_threshold: int = 75
    grade_c_threshold: int = 60
    grade_d_threshold: int = 40


@dataclass
class APISettings:
    """API-specific settings."""
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    allow_fetch: bool = True  # POST /audit without html fetches the URL


@dataclass
class Settings:
    """Main application settings container."""
    fetcher: FetcherSettings = field(default_factory=FetcherSettings)
    seo: SeoSettings = field(default_factory=SeoSettings)
    content: ContentSettings = field(default_factory=ContentSettings)
    performance: PerformanceSettings = field(default_factory=PerformanceSettings)
    grades: GradeSettings = field(default_factory=GradeSettings)
    api: APISettings = field(default_factory=APISettings)

    debug: bool = False

    def __post_init__(self):
        """Load settings from environment variables."""
        self.debug = os.environ.get("SEO_AUDITOR_DEBUG", "").lower() in ("true", "1", "yes")

        # Fetcher overrides
        if timeout := os.environ.get("SEO_AUDITOR_REQUEST_TIMEOUT"):
            self.fetcher.request_timeout = int(timeout)
        if user_agent := os.environ.get("SEO_AUDITOR_USER_AGENT"):
            self.fetcher.user_agent = user_agent

        # Readability mode
        if estimate := os.environ.get("SEO_AUDITOR_ESTIMATE_SYLLABLES"):
            self.content.estimate_syllables = estimate.lower() in ("true", "1", "yes")

        # API overrides
        if cors := os.environ.get("SEO_AUDITOR_CORS_ORIGINS"):
            self.api.cors_origins = [o.strip() for o in cors.split(",")]
        if allow_fetch := os.environ.get("SEO_AUDITOR_API_ALLOW_FETCH"):
            self.api.allow_fetch = allow_fetch.lower() in ("true", "1", "yes")


# Global settings instance
settings = Settings()
