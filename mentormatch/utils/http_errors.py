# mentormatch/utils/http_errors.py
from fastapi import HTTPException, status
from ..exceptions import (
    BusinessLogicError, NotFoundError, ForbiddenError, InvalidStatusTransitionError,
    InvalidArgumentError, DuplicateRequestError, AlreadyReviewedError, UnsupportedMediaTypeError,
    DuplicateEmailError, InvalidCredentialError,
)

# Most specific first; the first isinstance match wins
STATUS_BY_ERROR = (
    (InvalidCredentialError, status.HTTP_401_UNAUTHORIZED),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (DuplicateEmailError, status.HTTP_409_CONFLICT),
    (AlreadyReviewedError, status.HTTP_409_CONFLICT),
    (UnsupportedMediaTypeError, status.HTTP_415_UNSUPPORTED_MEDIA_TYPE),
    (DuplicateRequestError, status.HTTP_400_BAD_REQUEST),
    (InvalidStatusTransitionError, status.HTTP_400_BAD_REQUEST),
    (InvalidArgumentError, status.HTTP_400_BAD_REQUEST),
)

def to_http_exception(error: BusinessLogicError) -> HTTPException:
    """Maps a domain error to the response the transport sends back."""
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return HTTPException(status_code=status_code, detail=str(error))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
