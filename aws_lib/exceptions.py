class ConditionFailed(Exception):
    """A conditional write was rejected because the stored item did not match."""

    def __init__(self, table, key):
        super().__init__(f"Condition check failed on {table} {key}")
        self.table = table
        self.key = key


class BatchIncomplete(Exception):
    """DynamoDB kept returning unprocessed keys after every allowed pass."""

    def __init__(self, table, remaining):
        super().__init__(f"{len(remaining)} keys of {table} still unprocessed")
        self.table = table
        self.remaining = remaining
