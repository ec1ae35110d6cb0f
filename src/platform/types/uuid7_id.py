"""
UUID7 identifiers

Entity ids are time-ordered uuid7 values (uuid_utils) stored and transported as their
canonical string form, so SQLite and PostgreSQL columns share one type.
"""

import uuid_utils


def new_uuid7_id() -> str:
    return str(uuid_utils.uuid7())
