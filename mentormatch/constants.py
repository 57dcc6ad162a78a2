# mentormatch/constants.py
class ErrorMessages:
    USER_NOT_FOUND = "User not found"
    MENTOR_NOT_FOUND = "Mentor not found"
    REQUEST_NOT_FOUND = "Match request not found"
    MATCH_NOT_FOUND = "Match request not found"
    DUPLICATE_EMAIL = "User already exists with this email"
    INVALID_CREDENTIALS = "Invalid email or password"
    FORBIDDEN_PROFILE = "Cannot update another user's profile"
    ROLE_IMMUTABLE = "Cannot change user role"
    PENDING_FOR_MENTEE = "You already have a pending request. Please wait for a response or cancel it first."
    PENDING_FOR_PAIR = "You already have a pending request to this mentor"
    NOT_TARGET_MENTOR = "Only the requested mentor can respond to this request"
    NOT_OWNING_MENTEE = "Only the mentee who sent this request can cancel it"
    NOT_PENDING = "Request is not in pending status"
    NOT_ACCEPTED = "Match request has not been accepted"
    NOT_PARTICIPANT = "Not authorized to give feedback for this match"
    REVIEWEE_MISMATCH = "Invalid reviewee for this match"
    ALREADY_REVIEWED = "Feedback already submitted for this match"
    INVALID_RATING = "Rating must be an integer between 1 and 5"
    COMMENT_TOO_LONG = "Comment must be at most {limit} characters"
    INVALID_SORT_KEY = 'Invalid orderBy parameter. Must be "skill" or "name"'
    UNSUPPORTED_IMAGE = "Invalid image format. Must be base64 encoded JPEG or PNG"
    IMAGE_TOO_LARGE = "Image too large. Maximum size is {limit} bytes"
    EMPTY_MESSAGE = "Message must not be empty"
    ROLE_REQUIRED = "Access denied. {role} role required"

class BusinessRules:
    MIN_PASSWORD_LENGTH = 6
    MIN_RATING = 1
    MAX_RATING = 5
    ALLOWED_AVATAR_TYPES = ("image/jpeg", "image/png")
    SKILL_DELIMITER = ","

class MentorSortKey:
    NAME = "name"
    SKILL = "skill"
    ID = "id"
    ALLOWED = (NAME, SKILL)
