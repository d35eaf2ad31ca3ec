"""Data for rendering a model type from a table description."""

import re
from dataclasses import dataclass, field

from scratchkit.schema import Column, Table

_TYPE_MAP = {
    "int": "int32",
    "tinyint": "int32",
    "smallint": "int32",
    "mediumint": "int32",
    "enum": "int32",
    "bigint": "int64",
    "char": "string",
    "varchar": "string",
    "json": "string",
    "timestamp": "time.Time",
    "date": "time.Time",
    "datetime": "time.Time",
    "text": "string",
    "mediumtext": "string",
    "longtext": "string",
    "double": "float64",
    "decimal": "float64",
    "float": "float64",
}

_TIME_COLUMN_TYPES = frozenset({"date", "datetime", "timestamp"})

_WORD = re.compile(r"[^\W_]+")


class UnknownTypeError(ValueError):
    """Raised for a column data type that has no mapping."""


def map_type(data_type):
    """The target type for a column's data type."""
    try:
        return _TYPE_MAP[data_type]
    except KeyError:
        raise UnknownTypeError(f"Unknown type: {data_type}") from None


def _title(text):
    """Upper-case the first letter of each word, leaving the rest alone."""
    return _WORD.sub(lambda m: m.group(0)[0].title() + m.group(0)[1:], text)


def snake_to_camel(name):
    """Turn a snake-case name of either case into camel case.

    An all-upper-case word is lower-cased before its first letter is raised.
    """
    if "_" not in name:
        if name == name.upper():
            name = name.lower()
        return _title(name)

    words = []
    for word in name.split("_"):
        if not any(char.islower() for char in word):
            word = word.lower()
        words.append(_title(word))
    return "".join(words)


def import_packages(columns):
    """Packages the rendered model needs for the given columns."""
    needed = {"time" for column in columns if column.column_type in _TIME_COLUMN_TYPES}
    return sorted(needed)


@dataclass
class ModelColumn:
    """A column together with its rendered name and type."""

    column: Column
    camel_name: str
    mapping_type: str

    @classmethod
    def from_column(cls, column):
        return cls(
            column=column,
            camel_name=snake_to_camel(column.column_name),
            mapping_type=map_type(column.data_type),
        )


@dataclass(init=False)
class Model:
    """A table with its columns prepared for rendering, in ordinal order."""

    table: Table
    imports: list = field(default_factory=list)
    pkg_name: str = ""
    columns: list = field(default_factory=list)

    def __init__(self, table, columns, pkg_name):
        columns = list(columns or [])
        self.table = table if table is not None else Table()
        self.imports = import_packages(columns)
        self.pkg_name = pkg_name
        self.columns = sorted(
            (ModelColumn.from_column(column) for column in columns),
            key=lambda mc: mc.column.ordinal_position,
        )

    @property
    def model_name(self):
        """The camel-case name of the model type."""
        return snake_to_camel(self.table.table_name)

    @property
    def receiver_name(self):
        """The lower-cased first letter of the table name, or ''."""
        return self.table.table_name[:1].lower()