# mentormatch/exceptions.py
class BusinessLogicError(Exception):
    """Base exception for business logic errors"""
    pass

# --- General kinds ---

class NotFoundError(BusinessLogicError):
    """Raised when a resource is not found"""
    pass

class ForbiddenError(BusinessLogicError):
    """Raised when the caller has the wrong role or does not own the resource"""
    pass

class InvalidStatusTransitionError(BusinessLogicError):
    """Raised when a transition out of a non-pending state is attempted"""
    pass

class InvalidArgumentError(BusinessLogicError):
    """Raised for malformed filters, sort keys, ratings or sizes"""
    pass

class DuplicateRequestError(BusinessLogicError):
    """Raised when a second pending request would break uniqueness"""
    pass

class UnsupportedMediaTypeError(BusinessLogicError):
    """Raised for avatars that are not JPEG/PNG or exceed the size ceiling"""
    pass

# --- Identity ---

class DuplicateEmailError(BusinessLogicError):
    """Raised when signing up with an email that is already registered"""
    pass

class InvalidCredentialError(BusinessLogicError):
    """Raised for unknown email or wrong password alike"""
    pass

class RoleImmutableError(InvalidArgumentError):
    """Raised when a profile update tries to change the role"""
    pass

# --- Match requests ---

class MentorNotFoundError(NotFoundError):
    """Raised when the target of a request is not an existing mentor"""
    pass

class DuplicatePendingForMenteeError(DuplicateRequestError):
    """Raised when the mentee already has a pending request with any mentor"""
    pass

class DuplicatePendingForPairError(DuplicateRequestError):
    """Raised when a pending request already exists for this mentor-mentee pair"""
    pass

# --- Feedback ---

class MatchNotFoundError(NotFoundError):
    pass

class NotAcceptedYetError(InvalidStatusTransitionError):
    pass

class NotAParticipantError(ForbiddenError):
    pass

class RevieweeMismatchError(InvalidArgumentError):
    pass

class AlreadyReviewedError(BusinessLogicError):
    """Raised when the reviewer already left feedback on this match"""
    pass

class InvalidRatingError(InvalidArgumentError):
    pass

# --- Store ---

class StoreError(Exception):
    """Raised for store failures the caller cannot correct (surfaced as internal errors)"""
    pass

class TransientStoreError(StoreError):
    """Raised for contention or connectivity failures worth one retry"""
    pass

class MigrationError(StoreError):
    """Raised when a schema migration step fails; carries the structured report"""

    def __init__(self, report):
        self.report = report
        failed = ", ".join(step.name for step in report.failed)
        super().__init__(f"Migration failed at: {failed}")
