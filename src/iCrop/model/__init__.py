"""Edit record value type and its persistence schema."""

from .edit_record import EditRecord
from .schema import EDIT_RECORD_SCHEMA, iter_edit_record_errors

__all__ = ["EDIT_RECORD_SCHEMA", "EditRecord", "iter_edit_record_errors"]
