from fastapi import HTTPException, status


class BlogError(HTTPException):
    """Base for errors whose message is safe to show to API callers"""

    error = "error"

    def __init__(self, status_code: int, detail: str, headers: dict = None):
        super().__init__(status_code=status_code, detail=detail, headers=headers)


class AuthenticationRequired(BlogError):
    """Raised when the bearer token is missing or malformed"""

    error = "authentication_required"

    def __init__(self, detail: str = "Missing or malformed authentication token"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"}
        )


class InvalidToken(BlogError):
    """Raised when the identity provider rejects the token"""

    error = "invalid_token"

    def __init__(self, detail: str = "Invalid or expired authentication token"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail
        )


class InvalidInput(BlogError):
    error = "invalid_input"

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail
        )


class ArticleNotFound(BlogError):
    error = "not_found"

    def __init__(self, article_id: str):
        self.article_id = article_id
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Article '{article_id}' not found"
        )


class TransientStoreFailure(BlogError):
    """Raised when a store transaction keeps conflicting after all retries"""

    error = "transaction_failed"

    def __init__(self, detail: str = "The request could not be completed, please try again"):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail
        )
