from typing import Sequence

from dt_console.core.models import ColumnDescriptor, QueryRecord


def column_header(key: str) -> str:
    return key[:1].upper() + key[1:]


def infer_columns(records: Sequence[QueryRecord]) -> list[ColumnDescriptor]:
    """
    Derive table columns from the keys of the first record.

    Records are assumed to share the first record's shape: keys only present
    in later records do not get a column.
    """
    if not records:
        return []
    return [ColumnDescriptor(id=key, header=column_header(key)) for key in records[0]]
