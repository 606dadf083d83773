"""Base classes for the signal extractors."""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from bs4 import BeautifulSoup


class Status(Enum):
    """Qualitative severity of a signal."""
    GOOD = "good"
    WARNING = "warning"
    CRITICAL = "critical"
    INFO = "info"
    UNKNOWN = "unknown"

    @property
    def is_scored(self) -> bool:
        """INFO and UNKNOWN signals are reported but never scored."""
        return self not in (Status.INFO, Status.UNKNOWN)


class Category(Enum):
    """SEO dimensions an audit is broken into."""
    METADATA = "metadata"
    CONTENT = "content"
    IMAGES = "images"
    SOCIAL = "social"
    TECHNICAL = "technical"
    LINKS = "links"
    PERFORMANCE = "performance"
    SECURITY = "security"
    MEDIA = "media"
    FORMS = "forms"
    DEPRECATED_MARKUP = "deprecated_markup"
    ACCESSIBILITY = "accessibility"
    CONTENT_QUALITY = "content_quality"
    STRUCTURED_DATA = "structured_data"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()


@dataclass(frozen=True)
class Signal:
    """One extracted SEO fact paired with its status.

    Attributes:
        category: Category the signal belongs to
        name: Identifier of the signal within its category (e.g. "title")
        value: Raw extracted value (string, count, flag or list)
        status: Qualitative status
        detail: Optional qualifier such as "Too Short" or "Missing"
    """
    category: Category
    name: str
    value: Any
    status: Status
    detail: str | None = None

    @property
    def label(self) -> str:
        """Human-readable status, e.g. "Warning (Too Short)"."""
        text = self.status.value.capitalize()
        return f"{text} ({self.detail})" if self.detail else text

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "category": self.category.value,
            "name": self.name,
            "value": self.value,
            "status": self.status.value,
            "detail": self.detail,
        }


@dataclass
class CategoryReport:
    """Raw facts and signals produced by one extractor."""
    category: Category
    facts: dict[str, Any] = field(default_factory=dict)
    signals: list[Signal] = field(default_factory=list)

    def add(self, name: str, value: Any, status: Status, detail: str | None = None) -> Signal:
        signal = Signal(self.category, name, value, status, detail)
        self.signals.append(signal)
        return signal

    def signal(self, name: str) -> Signal | None:
        for signal in self.signals:
            if signal.name == name:
                return signal
        return None

    def status_of(self, name: str) -> Status | None:
        signal = self.signal(name)
        return signal.status if signal else None

    @property
    def statuses(self) -> list[Status]:
        return [signal.status for signal in self.signals]

    def to_dict(self) -> dict:
        return {
            "category": self.category.value,
            "facts": self.facts,
            "signals": [signal.to_dict() for signal in self.signals],
        }


class BaseExtractor(ABC):
    """Abstract base class for category extractors.

    Subclasses must implement:
    - category: the Category they report on
    - extract(): walk the document and return a CategoryReport

    Extractors must treat the document as read-only and must not raise on
    missing nodes; absent markup is a finding, not an error.
    """

    @property
    @abstractmethod
    def category(self) -> Category:
        """Category this extractor reports on."""
        pass

    @property
    def name(self) -> str:
        return self.category.label

    @abstractmethod
    def extract(
        self,
        doc: BeautifulSoup,
        url: str,
        **context: Any
    ) -> CategoryReport:
        """Extract facts and signals.

        Args:
            doc: Parsed document (read-only)
            url: URL the document was fetched from
            **context: Additional context (text analysis, headers, load time)

        Returns:
            CategoryReport with facts and signals
        """
        pass

    def new_report(self) -> CategoryReport:
        return CategoryReport(self.category)
