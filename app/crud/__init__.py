from app.crud.string import StringStore

# Process-wide store used by the API; tests build their own.
store = StringStore()


def get_store() -> StringStore:
    """Dependency to provide the string store."""
    return store
