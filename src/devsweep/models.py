"""Data models for devsweep."""

from enum import Enum, IntEnum
from typing import Literal, Optional

from pydantic import BaseModel, Field


def format_size(size_bytes: int) -> str:
    """Format bytes to a human-readable string (decimal units)."""
    if size_bytes >= 1000**3:
        return f"{size_bytes / (1000**3):.1f} GB"
    elif size_bytes >= 1000**2:
        return f"{size_bytes / (1000**2):.1f} MB"
    elif size_bytes >= 1000:
        return f"{size_bytes / 1000:.1f} KB"
    else:
        return f"{size_bytes} B"


class SafetyLevel(IntEnum):
    """Risk tier a collector assigns to a target."""

    SAFE = 0  # Easily rebuilt (caches, logs)
    MODERATE = 1  # Rebuild needed (node_modules, build outputs)
    DANGEROUS = 2  # Potential data loss (backups, VM images)

    @property
    def label(self) -> str:
        return self.name.capitalize()


class CleanLevel(IntEnum):
    """Operator-chosen aggressiveness policy."""

    CONSERVATIVE = 0  # Safe items only
    STANDARD = 1  # Safe + Moderate
    AGGRESSIVE = 2  # Everything, Dangerous included

    @property
    def label(self) -> str:
        return self.name.lower()


class Domain(str, Enum):
    """Technology domain a collector belongs to."""

    FRONTEND = "frontend"
    BACKEND = "backend"
    MOBILE = "mobile"
    DEVOPS = "devops"
    DATAML = "dataml"
    SYSTEM = "system"

    @property
    def label(self) -> str:
        labels = {
            Domain.FRONTEND: "Frontend",
            Domain.BACKEND: "Backend",
            Domain.MOBILE: "Mobile",
            Domain.DEVOPS: "DevOps",
            Domain.DATAML: "Data/ML",
            Domain.SYSTEM: "System",
        }
        return labels[self]


class CleanTarget(BaseModel):
    """A single item that can be cleaned."""

    path: str = Field(..., description="Absolute path to the item")
    description: str = Field(..., description="Human-readable description")
    size_bytes: int = Field(0, ge=0, description="Size in bytes")
    safety: SafetyLevel = Field(..., description="Risk tier of removing this item")

    @property
    def size_human(self) -> str:
        """Human-readable size string."""
        return format_size(self.size_bytes)


class CleanResult(BaseModel):
    """Outcome of cleaning a single target."""

    target: CleanTarget = Field(..., description="Target the attempt was made on")
    success: bool = Field(True, description="Whether the removal succeeded")
    bytes_freed: int = Field(0, ge=0, description="Bytes freed (simulated in dry run)")
    error: Optional[str] = Field(None, description="Error message if removal failed")
    dry_run: bool = Field(False, description="Whether this was a dry run")


class CollectorFailure(BaseModel):
    """A recorded detect/scan/clean failure of one collector."""

    collector: str = Field(..., description="Name of the failing collector")
    stage: Literal["detect", "scan", "clean"] = Field(..., description="Stage that failed")
    error: str = Field(..., description="Error message")


class CleanupReport(BaseModel):
    """Everything one orchestrated run found and did."""

    dry_run: bool = Field(False, description="Whether the run was a dry run")
    detected: list[str] = Field(default_factory=list, description="Collectors that applied")
    targets_by_collector: dict[str, list[CleanTarget]] = Field(default_factory=dict)
    results: list[CleanResult] = Field(default_factory=list)
    failures: list[CollectorFailure] = Field(default_factory=list)
    aborted: bool = Field(False, description="Operator declined the confirmation")
    cancelled: bool = Field(False, description="Run stopped on a cancellation signal")

    @property
    def total_targets(self) -> int:
        """Number of targets across all collectors."""
        return sum(len(targets) for targets in self.targets_by_collector.values())

    @property
    def total_bytes(self) -> int:
        """Bytes that could be reclaimed across all collectors."""
        return sum(
            t.size_bytes for targets in self.targets_by_collector.values() for t in targets
        )

    @property
    def bytes_freed(self) -> int:
        """Bytes freed by successful clean attempts."""
        return sum(r.bytes_freed for r in self.results if r.success)

    @property
    def success_count(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def failure_count(self) -> int:
        return sum(1 for r in self.results if not r.success)


class PathRule(BaseModel):
    """A fixed location (supports ~ expansion) owned by a collector."""

    path: str = Field(..., description="Path to measure")
    description: str = Field(..., description="What lives there")
    safety: SafetyLevel = Field(SafetyLevel.SAFE, description="Risk tier of removing it")


class PatternRule(BaseModel):
    """A base-name pattern searched for under the scan roots."""

    pattern: str = Field(..., description="Glob pattern matched against base names")
    description: str = Field(..., description="What the matches are")
    safety: SafetyLevel = Field(SafetyLevel.SAFE, description="Risk tier of removing a match")
    marker: Optional[str] = Field(
        None,
        description="File that must exist next to the match (e.g. 'Cargo.toml' for 'target')",
    )
    skip_inside: Optional[str] = Field(
        None,
        description="Drop matches whose parent directory has this name",
    )


class CollectorSpec(BaseModel):
    """Static definition of a catalog collector."""

    id: str = Field(..., description="Unique identifier")
    name: str = Field(..., description="Human-readable name, also the report key")
    domain: Domain = Field(..., description="Domain this collector belongs to")
    commands: list[str] = Field(
        default_factory=list,
        description="Detected when any of these commands is on PATH",
    )
    detect_paths: list[str] = Field(
        default_factory=list,
        description="Detected when any of these paths exists",
    )
    always: bool = Field(False, description="Always applicable")
    paths: list[PathRule] = Field(default_factory=list)
    patterns: list[PatternRule] = Field(default_factory=list)
