"""
Base Classes and Data Model for the Task Crawler

Defines the records that flow through the crawl, the component base class
and the exception hierarchy shared by all components.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Optional


class PageKind(Enum):
    """Kinds of pages the frontier dispatches"""
    START = "start"
    LISTING = "listing"


@dataclass(frozen=True)
class Context:
    """Page-level labels inherited by every record extracted from a page"""
    category: Optional[str] = None
    grade: Optional[str] = None

    def inherit(self, parent: "Context") -> "Context":
        """Fill fields this page did not provide from the enqueuing page"""
        return Context(
            category=self.category if self.category is not None else parent.category,
            grade=self.grade if self.grade is not None else parent.grade
        )


@dataclass(frozen=True)
class WorkItem:
    """A discovered page waiting to be fetched"""
    url: str
    kind: PageKind
    context: Context = Context()


@dataclass(frozen=True)
class Record:
    """An extracted item; ``local_path`` is attached by the archiver"""
    url: str
    title: str
    category: Optional[str] = None
    grade: Optional[str] = None
    local_path: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['localPath'] = data.pop('local_path')
        return data


@dataclass(frozen=True)
class JobPosting:
    """A job card read from a single listing page"""
    title: str
    company: str
    location: str
    salary: str
    date: str
    url: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class BaseComponent(ABC):
    """Base class for all crawler components"""

    def __init__(self, config: Dict[str, Any]):
        self.config = config
        self._initialized = False

    @abstractmethod
    async def initialize(self) -> None:
        """Initialize the component"""
        pass

    @abstractmethod
    async def cleanup(self) -> None:
        """Clean up resources"""
        pass

    def is_initialized(self) -> bool:
        """Check if component is initialized"""
        return self._initialized


class ScraperError(Exception):
    """Base exception for crawler errors"""
    pass


class ConfigurationError(ScraperError):
    """Configuration-related errors"""
    pass


class FetchError(ScraperError):
    """A single page could not be fetched"""

    def __init__(self, url: str, cause: Any):
        self.url = url
        self.cause = cause
        super().__init__(f"Failed to fetch {url}: {cause}")


class ExtractionError(ScraperError):
    """Markup could not be parsed"""
    pass


class StorageError(ScraperError):
    """Storage-related errors"""
    pass
