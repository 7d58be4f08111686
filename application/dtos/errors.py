class AppError:
    """Represents different categories of application errors."""

    def __init__(self, category: str, message: str, code: str | None = None) -> None:
        # 'validation', 'not_found', 'configuration', 'upstream', 'internal_error'
        self.category = category
        self.message = message
        self.code = code  # stable machine-readable reason, e.g. 'not_contract_owner'

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"AppError(category={self.category!r}, code={self.code!r}, message={self.message!r})"
