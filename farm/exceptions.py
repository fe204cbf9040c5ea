class RecordNotFound(LookupError):
    """Raised when an edit targets an id that is not in the collection."""

    def __init__(self, key, record_id):
        super().__init__(f"{key}: no record with id {record_id!r}")
        self.key = key
        self.record_id = record_id
