"""
Data models for the slice engine.

Defines the aligned segments, the tagged alignment results and the
validation result.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Tuple


class Side(Enum):
    SOURCE = "source"
    DESTINATION = "destination"


class AlignmentStep(Enum):
    """Which comparison branch produced a segment."""
    EQUAL = "equal"
    SPLIT_SOURCE = "split_source"
    SPLIT_DESTINATION = "split_destination"


class AlignerState(Enum):
    COMPARING = "comparing"
    EMIT_EQUAL = "emit_equal"
    EMIT_SPLIT_SOURCE = "emit_split_source"
    EMIT_SPLIT_DEST = "emit_split_dest"
    TERMINATED = "terminated"


@dataclass(frozen=True)
class AlignedSegment:
    """
    One matched pair on the shared quantity axis.

    ``start`` and ``end`` are the cumulative boundaries enclosing the pair;
    ``end - start`` equals the quantity of both halves.
    """

    start: Any
    end: Any
    source: Any
    destination: Any
    step: AlignmentStep

    @property
    def quantity(self):
        return self.source.get_key()

    @property
    def pair(self) -> Tuple[Any, Any]:
        return self.source, self.destination

    @property
    def is_split(self) -> bool:
        return self.step is not AlignmentStep.EQUAL

    def __str__(self) -> str:
        return f"Segment({self.start} → {self.end}, qty={self.quantity}, {self.step.value})"


@dataclass
class AlignmentResult:
    """
    Result of aligning two sequences.

    The aligner only returns the FullyReconciled / Unbalanced subclasses;
    their ``is_balanced`` tells the outcomes apart. Both expose the segments
    and the plain (source, destination) pairs.
    """

    segments: List[AlignedSegment]
    boundary: Any

    @property
    def pairs(self) -> List[Tuple[Any, Any]]:
        return [segment.pair for segment in self.segments]

    @property
    def consumed_quantity(self):
        return self.boundary

    @property
    def split_count(self) -> int:
        return sum(1 for segment in self.segments if segment.is_split)

    def __len__(self) -> int:
        return len(self.segments)


@dataclass
class FullyReconciled(AlignmentResult):
    """Both sequences were consumed completely at the same boundary."""

    @property
    def is_balanced(self) -> bool:
        return True

    def __str__(self) -> str:
        return f"FullyReconciled(✅ {len(self.segments)} pairs, qty={self.boundary})"


@dataclass
class Unbalanced(AlignmentResult):
    """
    One side ran out first.

    ``remainder`` holds the records of the other side that were never
    emitted, the partly consumed one first.
    """

    remainder_side: Side = Side.DESTINATION
    remainder_quantity: Any = None
    remainder: List[Any] = field(default_factory=list)

    @property
    def is_balanced(self) -> bool:
        return False

    def __str__(self) -> str:
        return (
            f"Unbalanced(⚠️ {len(self.segments)} pairs, qty={self.boundary}, "
            f"{self.remainder_side.value} remainder={self.remainder_quantity})"
        )


@dataclass
class ValidationResult:
    """
    Result of alignment validation.

    Contains validation checks and any discrepancies found.
    """

    is_valid: bool = True

    # Validation checks
    total_pairs: int = 0
    source_records: int = 0
    destination_records: int = 0

    # Discrepancies
    mismatched_pairs: int = 0
    broken_boundaries: int = 0
    refinement_errors: int = 0
    value_leaks: int = 0
    partial_records: int = 0

    # Error details
    error_messages: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Check if validation found errors."""
        return not self.is_valid or len(self.error_messages) > 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    @property
    def has_discrepancies(self) -> bool:
        return (
            self.mismatched_pairs > 0 or
            self.broken_boundaries > 0 or
            self.refinement_errors > 0 or
            self.value_leaks > 0
        )

    def add_error(self, message: str):
        """Add an error message."""
        self.error_messages.append(message)
        self.is_valid = False

    def add_warning(self, message: str):
        self.warnings.append(message)

    def __str__(self) -> str:
        status = "✅ VALID" if self.is_valid else "❌ INVALID"

        parts = [
            f"ValidationResult({status})",
            f"  Pairs: {self.total_pairs}",
            f"  Records: {self.source_records} source / {self.destination_records} destination",
        ]

        if self.has_discrepancies:
            parts.append("  ⚠️  Discrepancies found:")
            if self.mismatched_pairs > 0:
                parts.append(f"    - Mismatched pairs: {self.mismatched_pairs}")
            if self.broken_boundaries > 0:
                parts.append(f"    - Broken boundaries: {self.broken_boundaries}")
            if self.refinement_errors > 0:
                parts.append(f"    - Refinement errors: {self.refinement_errors}")
            if self.value_leaks > 0:
                parts.append(f"    - Value leaks: {self.value_leaks}")

        if self.error_messages:
            parts.append(f"  ❌ Errors: {len(self.error_messages)}")
            for err in self.error_messages[:3]:  # Show first 3
                parts.append(f"    - {err}")

        if self.warnings:
            parts.append(f"  ⚠️  Warnings: {len(self.warnings)}")
            for warn in self.warnings[:3]:
                parts.append(f"    - {warn}")

        return "\n".join(parts)
