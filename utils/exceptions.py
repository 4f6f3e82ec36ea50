class HashTableError(Exception):
    """
    Custom exception raised when a hash table is constructed with an invalid bucket count.
    """
    pass


class WordStoreError(Exception):
    """
    Custom exception raised when the backing word store fails to complete an operation.
    The mirror table is left unchanged when this is raised.
    """
    def __init__(self, operation, key, message="Word store operation failed"):
        self.operation = operation
        self.key = key
        super().__init__(f"{message}: {operation}('{key}')")
