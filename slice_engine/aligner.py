"""
Sequence Aligner

Walks a source and a destination sequence along one cumulative quantity axis
and emits (source, destination) pairs of equal quantity, splitting whichever
record straddles the next boundary.
"""

from decimal import Decimal
from typing import Any, List, Optional, Sequence, Tuple

from Config.constants_core import ENGINE_LOGGER_NAME
from Config.environment import env
from Shared_Utils.logger import as_structured, get_component_logger, log_performance
from Shared_Utils.precision import zero_like
from .exceptions import EmptyInputError, NonPositiveQuantityError, UnbalancedSequencesError
from .models import (
    AlignedSegment,
    AlignerState,
    AlignmentResult,
    AlignmentStep,
    FullyReconciled,
    Side,
    Unbalanced,
)
from .splitter import split_item


class SequenceAligner:
    """
    Aligns two quantity-partitioned sequences onto a shared partition.

    Core Principles:
    - Inputs are never mutated; splits produce fresh records
    - Value attributes are conserved exactly across splits
    - One pass, O(n + m) comparisons, at most one split per step
    - Running out on one side ends the walk; the other side's remainder is
      reported (Unbalanced) or raised (strict mode), never merged

    Usage:
        aligner = SequenceAligner()
        result = aligner.align(purchase_lots, shipment_lots)
        if not result.is_balanced:
            print(result.remainder_side, result.remainder_quantity)
    """

    def __init__(
        self,
        strict: Optional[bool] = None,
        value_quantum: Optional[Decimal] = None,
        logger=None,
    ):
        """
        Initialize Sequence Aligner.

        Args:
            strict: Raise UnbalancedSequencesError on unequal totals
                (default: SLICE_STRICT_BALANCE)
            value_quantum: Decimal step split values are truncated to
                (default: SLICE_VALUE_QUANTUM, usually none)
            logger: Logger or adapter to use (default: slice_engine.aligner)
        """
        self.strict = env.strict_balance if strict is None else strict
        self.value_quantum = env.value_quantum if value_quantum is None else value_quantum
        self.logger = as_structured(logger) if logger is not None else get_component_logger('aligner')

    def align(self, source: Sequence[Any], destination: Sequence[Any]) -> AlignmentResult:
        """
        Align source and destination records.

        Args:
            source: Records to be split onto the destination's boundaries
            destination: Records to be split onto the source's boundaries

        Returns:
            FullyReconciled when both sides end on the same boundary,
            Unbalanced otherwise

        Raises:
            EmptyInputError: either sequence is empty
            NonPositiveQuantityError: an input record has quantity <= 0
            UnbalancedSequencesError: totals differ and strict mode is on
        """
        source_items = list(source)
        destination_items = list(destination)
        self._check_inputs(source_items, destination_items)

        src_index = 0
        dest_index = 0
        current_source = source_items[0]
        current_destination = destination_items[0]
        boundary = zero_like(current_source.get_key())

        segments: List[AlignedSegment] = []
        remainder: List[Any] = []
        remainder_side = None

        while True:
            source_next = boundary + current_source.get_key()
            dest_next = boundary + current_destination.get_key()
            state = self._compare(source_next, dest_next)
            self.logger.debug(f"{state.name} at {boundary}: source→{source_next}, destination→{dest_next}")

            if state is AlignerState.EMIT_SPLIT_SOURCE:
                offset = current_destination.get_key()
                left, right = split_item(current_source, offset, self.value_quantum)
                segments.append(AlignedSegment(
                    boundary, dest_next, left, current_destination, AlignmentStep.SPLIT_SOURCE
                ))
                self.logger.split(
                    f"Split source record #{src_index} at {offset}",
                    extra={'boundary': dest_next, 'left': offset, 'right': right.get_key()},
                )
                current_source = right
                boundary = dest_next

                dest_index += 1
                if dest_index == len(destination_items):
                    remainder_side = Side.SOURCE
                    remainder = [current_source] + source_items[src_index + 1:]
                    break
                current_destination = destination_items[dest_index]

            elif state is AlignerState.EMIT_SPLIT_DEST:
                offset = current_source.get_key()
                left, right = split_item(current_destination, offset, self.value_quantum)
                segments.append(AlignedSegment(
                    boundary, source_next, current_source, left, AlignmentStep.SPLIT_DESTINATION
                ))
                self.logger.split(
                    f"Split destination record #{dest_index} at {offset}",
                    extra={'boundary': source_next, 'left': offset, 'right': right.get_key()},
                )
                current_destination = right
                boundary = source_next

                src_index += 1
                if src_index == len(source_items):
                    remainder_side = Side.DESTINATION
                    remainder = [current_destination] + destination_items[dest_index + 1:]
                    break
                current_source = source_items[src_index]

            else:
                segments.append(AlignedSegment(
                    boundary, source_next, current_source, current_destination, AlignmentStep.EQUAL
                ))
                boundary = source_next

                src_index += 1
                if src_index == len(source_items):
                    remainder_side = Side.DESTINATION
                    remainder = destination_items[dest_index + 1:]
                    break
                current_source = source_items[src_index]

                dest_index += 1
                if dest_index == len(destination_items):
                    remainder_side = Side.SOURCE
                    remainder = [current_source] + source_items[src_index + 1:]
                    break
                current_destination = destination_items[dest_index]

        self.logger.debug(f"{AlignerState.TERMINATED.name} at {boundary}")
        return self._finish(segments, boundary, remainder_side, remainder)

    def split_all(self, source: Sequence[Any], destination: Sequence[Any]) -> List[Tuple[Any, Any]]:
        """
        Align and return plain (source, destination) pairs.

        Whatever is left of the longer side is dropped from the return value
        (it is still logged, and raised in strict mode).
        """
        return self.align(source, destination).pairs

    # =========================================================================
    # HELPERS
    # =========================================================================

    @staticmethod
    def _compare(source_next, dest_next) -> AlignerState:
        if source_next > dest_next:
            return AlignerState.EMIT_SPLIT_SOURCE
        if source_next < dest_next:
            return AlignerState.EMIT_SPLIT_DEST
        return AlignerState.EMIT_EQUAL

    @staticmethod
    def _check_inputs(source_items: List[Any], destination_items: List[Any]):
        """Reject empty sequences and non-positive quantities before any work."""
        if not source_items:
            raise EmptyInputError(Side.SOURCE.value)
        if not destination_items:
            raise EmptyInputError(Side.DESTINATION.value)

        for side, items in ((Side.SOURCE, source_items), (Side.DESTINATION, destination_items)):
            for index, item in enumerate(items):
                quantity = item.get_key()
                if not quantity > zero_like(quantity):
                    raise NonPositiveQuantityError(side.value, index, quantity)

    def _finish(self, segments, boundary, remainder_side, remainder) -> AlignmentResult:
        split_count = sum(1 for segment in segments if segment.is_split)

        if not remainder:
            self.logger.info(
                f"✅ Aligned {len(segments)} pairs ({split_count} splits), qty={boundary}"
            )
            return FullyReconciled(segments=segments, boundary=boundary)

        remainder_quantity = zero_like(boundary)
        for item in remainder:
            remainder_quantity = remainder_quantity + item.get_key()

        self.logger.unbalanced(
            f"⚠️  Unbalanced sequences: aligned {boundary}, "
            f"{remainder_side.value} has {remainder_quantity} left in {len(remainder)} records",
            extra={'pairs': len(segments), 'splits': split_count},
        )

        if self.strict:
            raise UnbalancedSequencesError(boundary, remainder_side.value, remainder_quantity)

        return Unbalanced(
            segments=segments,
            boundary=boundary,
            remainder_side=remainder_side,
            remainder_quantity=remainder_quantity,
            remainder=remainder,
        )


# =============================================================================
# Module-level shortcuts
# =============================================================================

@log_performance(ENGINE_LOGGER_NAME, level='DEBUG')
def align(source: Sequence[Any], destination: Sequence[Any], strict: Optional[bool] = None) -> AlignmentResult:
    """Align with a default-configured SequenceAligner."""
    return SequenceAligner(strict=strict).align(source, destination)


def split_all(source: Sequence[Any], destination: Sequence[Any]) -> List[Tuple[Any, Any]]:
    """
    Align and return plain (source, destination) pairs.

    Examples:
        >>> split_all([Lot(qty=5)], [Lot(qty=3), Lot(qty=10)])
        [(Lot(qty=3), Lot(qty=3)), (Lot(qty=2), Lot(qty=2))]
    """
    return SequenceAligner().split_all(source, destination)
