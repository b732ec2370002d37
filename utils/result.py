from typing import Generic, TypeVar, Optional, Callable, Any

T = TypeVar('T')  # Generic type variable


class Result(Generic[T]):
    """
    A generic result class that represents the outcome of an operation.

    Every expected failure in the packing list pipeline (bad input, parse
    errors, empty batches) is returned as a failed Result instead of being
    raised, so callers can branch on ``success`` and read a stable ``code``.

    Attributes:
        success (bool): Indicates if the operation was successful
        data (Optional[T]): The result data (only present when success is True)
        error (Optional[str]): Human readable message (only present when success is False)
        code (Optional[str]): Machine readable error code such as ``EMPTY_INPUT``
        details (Optional[Any]): Extra failure information, e.g. a list of validation issues
    """
    def __init__(
        self,
        success: bool,
        data: Optional[T] = None,
        error: Optional[str] = None,
        code: Optional[str] = None,
        details: Optional[Any] = None
    ):
        """
        Initialize a Result object.

        Args:
            success (bool): Whether the operation succeeded
            data (Optional[T], optional): The data returned by a successful operation. Defaults to None.
            error (Optional[str], optional): Error message for a failed operation. Defaults to None.
            code (Optional[str], optional): Error code for a failed operation. Defaults to None.
            details (Optional[Any], optional): Extra failure information. Defaults to None.
        """
        self.success = success
        self.data = data
        self.error = error
        self.code = code
        self.details = details

    @classmethod
    def ok(cls, data: T) -> "Result[T]":
        """
        Create a successful Result with the provided data.

        Args:
            data (T): The data to be wrapped in the Result

        Returns:
            Result[T]: A successful Result containing the provided data
        """
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str, code: str, details: Optional[Any] = None) -> "Result[T]":
        """
        Create a failed Result with the provided error message and code.

        Args:
            error (str): The error message describing the failure
            code (str): Stable error code identifying the failure
            details (Optional[Any], optional): Extra failure information. Defaults to None.

        Returns:
            Result[T]: A failed Result containing the error message and code
        """
        return cls(success=False, error=error, code=code, details=details)

    def is_success(self) -> bool:
        """
        Check if the Result represents a successful operation.

        Returns:
            bool: True if the Result is successful, False otherwise
        """
        return self.success

    def is_failure(self) -> bool:
        """
        Check if the Result represents a failed operation.

        Returns:
            bool: True if the Result is a failure, False otherwise
        """
        return not self.success

    def on_failure(self, fn: Callable[[str, str], None]) -> "Result[T]":
        """
        Execute a side effect function with the error message and code if the Result is a failure.

        Returns:
            Result[T]: The original Result, unchanged
        """
        if not self.is_success():
            fn(self.error or "", self.code or "")
        return self

    def __str__(self) -> str:
        if self.is_success():
            data_repr = str(self.data)
            # Truncate long data representations
            if len(data_repr) > 100:
                data_repr = f"{data_repr[:97]}..."
            return f"Success: {data_repr}"
        return f"Failure ({self.code}): {self.error}"

    def __repr__(self) -> str:
        return f"Result(success={self.success}, data={self.data!r}, error={self.error!r}, code={self.code!r})"
