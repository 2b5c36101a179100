"""Pure budgeting and scheduling logic.

Nothing in this package touches Flask, the session or the database: callers
pass in the rows they fetched, the caller's user id and a reference instant.
"""
