"""Descriptions of database tables and their columns.

A missing value read from the catalogue (``None``) is kept as the empty
string for text fields and as zero for numeric ones.
"""

from dataclasses import dataclass, fields


def _normalise(instance):
    for spec in fields(instance):
        if getattr(instance, spec.name) is None:
            setattr(instance, spec.name, spec.default)


@dataclass
class Table:
    """A table: its name, primary key column and comment."""

    table_name: str = ""
    pk: str = ""
    table_comment: str = ""

    def __post_init__(self):
        _normalise(self)


@dataclass
class Column:
    """A column as described by the schema catalogue."""

    table_catalog: str = ""
    table_schema: str = ""
    table_name: str = ""
    column_name: str = ""
    ordinal_position: int = 0
    column_default: str = ""
    is_nullable: str = ""
    data_type: str = ""
    character_maximum_length: int = 0
    character_octet_length: int = 0
    numeric_precision: int = 0
    numeric_scale: int = 0
    datetime_precision: int = 0
    character_set_name: str = ""
    collation_name: str = ""
    column_type: str = ""
    column_key: str = ""
    extra: str = ""
    privileges: str = ""
    column_comment: str = ""
    generation_expression: str = ""
    srs_id: int = 0

    def __post_init__(self):
        _normalise(self)