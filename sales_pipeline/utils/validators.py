"""Frame validation using pandera, reporting the earliest failing record."""

import pandas as pd
from pandera.errors import SchemaErrors
from pandera.pandas import DataFrameSchema

from sales_pipeline.errors import InvalidRecordError


def _describe(failure: dict) -> str:
    match failure:
        case {"check": check, "failure_case": value} if value is not None:
            return f"value {value!r} failed check '{check}'"
        case {"check": check}:
            return f"failed check '{check}'"
        case _:
            return f"validation failure: {failure}"


def check_frame(frame: pd.DataFrame, schema: DataFrameSchema) -> pd.DataFrame:
    """Validate a frame against a pandera schema.

    Rows are expected to be indexed by record location (e.g. ``products[2]``).
    On failure, raises InvalidRecordError for the failing row that comes first
    in the frame; frame-wide failures are reported without a location.
    """
    if frame.empty:
        return frame

    try:
        return schema.validate(frame, lazy=True)
    except SchemaErrors as exc:
        failures = exc.failure_cases
        located = failures[failures["index"].isin(frame.index)]

        if located.empty:
            first = failures.iloc[0].to_dict()
            raise InvalidRecordError(_describe(first)) from exc

        positions = located["index"].map(frame.index.get_loc)
        first = located.assign(_pos=positions).sort_values("_pos", kind="stable").iloc[0].to_dict()
        location = f"{first['index']}.{first['column']}" if first.get("column") else str(first["index"])
        raise InvalidRecordError(_describe(first), location) from exc
