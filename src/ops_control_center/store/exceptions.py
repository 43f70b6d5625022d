class StoreError(Exception):
    pass


class NotConfiguredError(StoreError):
    def __init__(
        self,
        message: str = "Supabase is not configured. Set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY.",
    ) -> None:
        super().__init__(message)


class QueryError(StoreError):
    def __init__(self, table: str, status_code: int | None = None, detail: str = "") -> None:
        message = f"Supabase select failed ({table})"
        if status_code is not None:
            message += f": {status_code}"
        if detail:
            message += f" {detail}"
        super().__init__(message)
        self.table = table
        self.status_code = status_code


class FetchTimeoutError(StoreError):
    def __init__(self, table: str, timeout: float) -> None:
        super().__init__(f"Supabase select timed out after {timeout}s ({table})")
        self.table = table
        self.timeout = timeout
