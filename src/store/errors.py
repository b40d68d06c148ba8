class StoreError(Exception):
    """
    Raised when the data files cannot be read or written, or hold a record
    that cannot be parsed. Meant to be shown to the user, not swallowed.
    """

    def __init__(self, message: str, path: str | None = None, line_no: int | None = None):
        super().__init__(message)
        self.path = path
        self.line_no = line_no

    def __str__(self) -> str:
        msg = super().__str__()
        if self.path and self.line_no:
            return f"{self.path}:{self.line_no}: {msg}"
        if self.path:
            return f"{self.path}: {msg}"
        return msg
