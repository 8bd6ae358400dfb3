"""
Alignment Validator

Validates alignment invariants and detects discrepancies.
"""

from typing import Any, List, Sequence

from Shared_Utils.logger import as_structured, get_component_logger
from Shared_Utils.precision import zero_like
from .models import AlignedSegment, AlignmentResult, Side, ValidationResult


class AlignmentValidator:
    """
    Validates an alignment to ensure correctness.

    Checks:
    - Every pair has equal source and destination quantities
    - Boundaries start at zero, strictly increase and chain without gaps
    - Source segments, in order, refine the original source records
      (and likewise for the destination)
    - Values of every fully covered record add back up to the original exactly
    - Records only partly covered (unbalanced tail) are reported as warnings
    """

    def __init__(self, logger=None):
        """
        Initialize Alignment Validator.

        Args:
            logger: Logger or adapter to use (default: slice_engine.validator)
        """
        self.logger = as_structured(logger) if logger is not None else get_component_logger('validator')

    def validate(
        self,
        source: Sequence[Any],
        destination: Sequence[Any],
        result: AlignmentResult,
        strict: bool = False,
    ) -> ValidationResult:
        """
        Validate an alignment against the sequences it was built from.

        Args:
            source: Original source records
            destination: Original destination records
            result: Result returned by SequenceAligner.align
            strict: If True, treat warnings as errors

        Returns:
            ValidationResult with validation details
        """
        source = list(source)
        destination = list(destination)
        segments = result.segments

        validation = ValidationResult(
            total_pairs=len(segments),
            source_records=len(source),
            destination_records=len(destination),
        )
        self.logger.info(f"🔍 Validating alignment of {len(segments)} pairs (strict={strict})")

        self._check_pair_quantities(segments, validation)
        self._check_boundaries(segments, validation)
        self._check_refinement(
            source, [segment.source for segment in segments], Side.SOURCE, result, validation
        )
        self._check_refinement(
            destination, [segment.destination for segment in segments], Side.DESTINATION, result, validation
        )

        if validation.has_errors:
            validation.is_valid = False
            self.logger.error(f"❌ Validation FAILED: {len(validation.error_messages)} errors")
        elif validation.has_warnings and strict:
            validation.is_valid = False
            self.logger.warning("⚠️  Validation FAILED (strict mode)")
        else:
            self.logger.info("✅ Validation PASSED")

        return validation

    # =========================================================================
    # VALIDATION CHECKS
    # =========================================================================

    def _check_pair_quantities(self, segments: List[AlignedSegment], validation: ValidationResult):
        """Both halves of a pair must carry the quantity between its boundaries."""
        for index, segment in enumerate(segments):
            source_qty = segment.source.get_key()
            destination_qty = segment.destination.get_key()
            if source_qty != destination_qty or segment.end - segment.start != source_qty:
                validation.mismatched_pairs += 1
                validation.add_error(
                    f"Pair #{index}: source={source_qty}, destination={destination_qty}, "
                    f"span={segment.start}..{segment.end}"
                )

        if validation.mismatched_pairs > 0:
            self.logger.error(f"❌ {validation.mismatched_pairs} mismatched pairs")

    def _check_boundaries(self, segments: List[AlignedSegment], validation: ValidationResult):
        if not segments:
            return

        first = segments[0]
        if first.start != zero_like(first.start):
            validation.broken_boundaries += 1
            validation.add_error(f"First pair starts at {first.start}, not zero")

        previous_end = None
        for index, segment in enumerate(segments):
            if not segment.start < segment.end:
                validation.broken_boundaries += 1
                validation.add_error(f"Pair #{index} does not advance: {segment.start}..{segment.end}")
            if previous_end is not None and segment.start != previous_end:
                validation.broken_boundaries += 1
                validation.add_error(
                    f"Gap before pair #{index}: previous ended at {previous_end}, this starts at {segment.start}"
                )
            previous_end = segment.end

    def _check_refinement(
        self,
        originals: List[Any],
        pieces: List[Any],
        side: Side,
        result: AlignmentResult,
        validation: ValidationResult,
    ):
        """
        Walk the original records and the emitted pieces of one side together.

        Each original must be covered by a run of consecutive pieces whose
        quantities and values add up to the original exactly. Only the side
        left over in an unbalanced result may end early.
        """
        may_end_early = not result.is_balanced and result.remainder_side is side
        position = 0

        for index, original in enumerate(originals):
            if position == len(pieces):
                if not may_end_early:
                    validation.refinement_errors += 1
                    validation.add_error(f"{side.value} record #{index} was never emitted")
                return

            target = original.get_key()
            covered = zero_like(target)
            totals = [zero_like(value) for value in original.get_values()]

            while covered < target and position < len(pieces):
                piece = pieces[position]
                covered = covered + piece.get_key()
                totals = [total + value for total, value in zip(totals, piece.get_values())]
                position += 1

            if covered > target:
                validation.refinement_errors += 1
                validation.add_error(
                    f"{side.value} segments overrun record #{index}: covered {covered} of {target}"
                )
                return

            if covered < target:
                if may_end_early:
                    validation.partial_records += 1
                    validation.add_warning(
                        f"{side.value} record #{index} only partly aligned: {covered} of {target}"
                    )
                else:
                    validation.refinement_errors += 1
                    validation.add_error(
                        f"{side.value} record #{index} under-covered: {covered} of {target}"
                    )
                return

            if totals != list(original.get_values()):
                validation.value_leaks += 1
                validation.add_error(
                    f"{side.value} record #{index} values {original.get_values()} "
                    f"re-assemble to {totals}"
                )

        if position < len(pieces):
            validation.refinement_errors += 1
            validation.add_error(
                f"{len(pieces) - position} {side.value} segments left after the last record"
            )
