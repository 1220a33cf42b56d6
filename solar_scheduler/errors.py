# errors.py


class RecordError(Exception):
    """
    Base class for every user-facing failure in the record flows.

    Each subclass carries a stable ``code`` used by the HTTP layer and an
    ``http_status`` for the JSON error response. None of them are fatal.
    """
    code = 'record_error'
    http_status = 400

    def __init__(self, message, field=None):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self):
        payload = {
            'error': self.code,
            'message': self.message
        }
        if self.field:
            payload['field'] = self.field
        return payload


class MissingRequiredField(RecordError):
    code = 'missing_required_field'

    def __init__(self, field):
        super().__init__(f"{field.replace('_', ' ').capitalize()} is required", field=field)


class InvalidEmailFormat(RecordError):
    code = 'invalid_email_format'

    def __init__(self, value, field='contact_email'):
        super().__init__("Please enter a valid email address", field=field)
        self.value = value


class InvalidFieldValue(RecordError):
    code = 'invalid_field_value'

    def __init__(self, field, messages):
        if isinstance(messages, (list, tuple)):
            text = '; '.join(str(m) for m in messages)
        else:
            text = str(messages)
        super().__init__(text, field=field)
        self.messages = messages


class PersistenceFailure(RecordError):
    code = 'persistence_failure'
    http_status = 500

    def __init__(self, reason):
        super().__init__(f"Failed to save: {reason}")
        self.reason = reason


class AuthFailure(RecordError):
    code = 'auth_failure'
    http_status = 401

    def __init__(self, reason):
        super().__init__(reason)
        self.reason = reason


class AuthCancelled(RecordError):
    """Raised when the user dismisses a sign-in prompt. Never shown to the user."""
    code = 'auth_cancelled'
    http_status = 204

    def __init__(self):
        super().__init__("Sign in cancelled")
