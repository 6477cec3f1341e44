"""
Ingestion domain models.

Typed chunk metadata, per-document results and batch summaries.

Dependencies: pydantic
System role: Contracts between the ingestion orchestrator and its callers
"""

import enum

from pydantic import BaseModel, ConfigDict, Field


class IngestionState(str, enum.Enum):
    """
    Where a document ended up in the ingestion state machine.

    NEW: No chunks stored for the source yet
    UNCHANGED: Stored hash equals the current hash; nothing written
    CHANGED: Stored hash differs; old chunks deleted before re-chunking
    STORED: Chunks persisted
    FAILED: Delete/split/embed/store raised; nothing committed
    EMPTY: Content blank; rejected before hashing
    """

    NEW = "new"
    UNCHANGED = "unchanged"
    CHANGED = "changed"
    STORED = "stored"
    FAILED = "failed"
    EMPTY = "empty"


class IngestionStatus(str, enum.Enum):
    """Outcome reported to callers for one document."""

    SUCCESS = "success"
    SKIPPED = "skipped"
    ERROR = "error"


class ChunkMetadata(BaseModel):
    """
    Metadata stored with every chunk.

    source and hash are required; extra keys (title, start_index, ...) are
    kept as-is.
    """

    model_config = ConfigDict(extra="allow")

    source: str = Field(min_length=1, description="Logical document identifier")
    hash: str = Field(
        pattern=r"^[0-9a-f]{64}$",
        description="SHA-256 of the whole originating document",
    )
    title: str | None = Field(default=None, description="Optional display title")

    def to_store(self) -> dict:
        """Serialize for the JSON metadata column, omitting unset optionals."""
        return self.model_dump(exclude_none=True)


class IngestionResult(BaseModel):
    """Result of ingesting one document."""

    source: str
    status: IngestionStatus
    state: IngestionState
    message: str
    chunks: int = 0
    hash: str | None = None
    previous_hash: str | None = None


class BatchIngestionSummary(BaseModel):
    """Aggregated outcome of a batch run."""

    results: list[IngestionResult] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.results)

    def _count(self, status: IngestionStatus) -> int:
        return sum(1 for result in self.results if result.status == status)

    @property
    def success_count(self) -> int:
        return self._count(IngestionStatus.SUCCESS)

    @property
    def skipped_count(self) -> int:
        return self._count(IngestionStatus.SKIPPED)

    @property
    def error_count(self) -> int:
        return self._count(IngestionStatus.ERROR)

    @property
    def chunks_stored(self) -> int:
        return sum(result.chunks for result in self.results)
