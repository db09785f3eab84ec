"""Statement-type guard for literal SQL supplied with a query request."""

import sqlparse


class SQLGuardError(Exception):
    """Raised when literal SQL is not a single SELECT statement."""
    pass


def ensure_single_select(sql_text: str) -> str:
    """
    Accept exactly one SELECT statement (CTEs included) and return it unchanged.

    The text is never rewritten; only its statement type is checked.
    """
    statements = [s for s in sqlparse.parse(sql_text) if s.token_first(skip_cm=True, skip_ws=True) is not None]
    if len(statements) != 1:
        raise SQLGuardError("Only a single SELECT statement is allowed")

    if statements[0].get_type() != "SELECT":
        raise SQLGuardError("Only a single SELECT statement is allowed")

    return sql_text
