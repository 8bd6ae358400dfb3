"""
Alignment reporting helpers.

Turns an AlignmentResult into a pandas DataFrame for inspection and
a flat summary dict.
"""

from typing import Any, Dict, List, Optional, Sequence

import pandas as pd

from .models import AlignmentResult


def _value_columns(prefix: str, names: Optional[Sequence[str]], width: int) -> List[str]:
    if names is None:
        names = [str(i) for i in range(width)]
    elif len(names) != width:
        raise ValueError(f"Expected {width} {prefix} value names, got {len(names)}")
    return [f"{prefix}_{name}" for name in names]


def segments_to_frame(
    result: AlignmentResult,
    source_value_names: Optional[Sequence[str]] = None,
    destination_value_names: Optional[Sequence[str]] = None,
) -> pd.DataFrame:
    """
    One row per aligned pair.

    Columns: start, end, quantity, step, then source_<name> and
    destination_<name> for every value attribute. Values keep their own
    type (object dtype), so Decimals are not turned into floats.

    Args:
        result: Alignment to tabulate
        source_value_names: Names for the source value attributes
            (default: their positions)
        destination_value_names: Same for the destination
    """
    segments = result.segments
    source_width = len(segments[0].source.get_values()) if segments else len(source_value_names or ())
    destination_width = (
        len(segments[0].destination.get_values()) if segments else len(destination_value_names or ())
    )
    source_columns = _value_columns('source', source_value_names, source_width)
    destination_columns = _value_columns('destination', destination_value_names, destination_width)

    rows = []
    for segment in segments:
        row: Dict[str, Any] = {
            'start': segment.start,
            'end': segment.end,
            'quantity': segment.quantity,
            'step': segment.step.value,
        }
        row.update(zip(source_columns, segment.source.get_values()))
        row.update(zip(destination_columns, segment.destination.get_values()))
        rows.append(row)

    columns = ['start', 'end', 'quantity', 'step'] + source_columns + destination_columns
    return pd.DataFrame(rows, columns=columns, dtype=object)


def summarize(result: AlignmentResult) -> Dict[str, Any]:
    """Headline numbers for an alignment."""
    return {
        'pairs': len(result.segments),
        'splits': result.split_count,
        'consumed_quantity': result.consumed_quantity,
        'balanced': result.is_balanced,
        'remainder_side': None if result.is_balanced else result.remainder_side.value,
        'remainder_quantity': None if result.is_balanced else result.remainder_quantity,
    }
