class AggregationError(Exception):
    def __init__(self, message: str = "Failed to load control center metrics") -> None:
        super().__init__(message)
