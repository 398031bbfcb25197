"""
Pydantic schema for export options
"""

from pydantic import BaseModel, Field
from typing import Optional
from core.config import Settings, settings as default_settings


class ExportOptions(BaseModel):
    """
    Runtime options of one export.

    Attributes:
        null_value: Sentinel written for every null scalar or null link
        table_prefix: Tables whose name starts with this prefix are exported
        date_format: strftime pattern for dates (None = locale long date+time)
        strict_schema: Abort the export when a table schema cannot be
            resolved; when False the table is exported as an empty array
    """

    null_value: str = "[null]"
    table_prefix: str = Field("class_", min_length=1)
    date_format: Optional[str] = None
    strict_schema: bool = True

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "ExportOptions":
        """Build options from application settings"""
        s = settings or default_settings
        return cls(
            null_value=s.EXPORT_NULL_VALUE,
            table_prefix=s.EXPORT_TABLE_PREFIX,
            date_format=s.EXPORT_DATE_FORMAT,
            strict_schema=s.EXPORT_STRICT_SCHEMA,
        )
