"""secretsync Exception Classes

Base exception hierarchy for 1Password item to Kubernetes Secret sync.
All custom exceptions include help_text for actionable user guidance.
"""

from typing import Optional


class SecretSyncError(Exception):
    """Base exception for all secretsync errors

    Attributes:
        message: Human-readable error description
        help_text: Optional actionable guidance for resolving the error
    """

    def __init__(self, message: str, help_text: str = None):
        """Initialize secretsync error with message and optional help text

        Args:
            message: Error description
            help_text: Optional remediation guidance
        """
        self.message = message
        self.help_text = help_text
        super().__init__(message)

    def __str__(self) -> str:
        """Format error message with help text if available"""
        if self.help_text:
            return f"{self.message}\n\nHelp: {self.help_text}"
        return self.message


class TemplateError(SecretSyncError):
    """Base class for secret template failures"""


class TemplateParseError(TemplateError):
    """Raised when a secret template has malformed syntax"""

    def __init__(self, reason: str, lineno: Optional[int] = None):
        message = f"Failed to parse template: {reason}"
        if lineno is not None:
            message += f" (line {lineno})"
        super().__init__(
            message,
            "Check the template delimiters, e.g. '{{ Fields.username }}'"
        )
        self.reason = reason
        self.lineno = lineno


class TemplateExecutionError(TemplateError):
    """Raised when a parsed template fails to render against an item"""

    def __init__(self, reason: str):
        super().__init__(
            f"Failed to execute template: {reason}",
            "Templates can only reference Fields, Sections and FieldsByID"
        )
        self.reason = reason


class ValidationError(SecretSyncError):
    """Raised when a required input is missing or malformed

    Covers missing image pull secret fields and malformed boolean
    annotation values.
    """

    def __init__(self, message: str, field: Optional[str] = None, help_text: str = None):
        super().__init__(message, help_text)
        self.field = field


class ImmutableTypeError(SecretSyncError):
    """Raised when a reconcile would change the type of an existing Secret"""

    def __init__(self, secret_name: str, current_type: str, requested_type: str):
        message = (
            f"Cannot change type of Secret '{secret_name}' from "
            f"'{current_type}' to '{requested_type}': secret type is immutable"
        )
        help_text = (
            "Delete the existing Secret so it can be recreated with the new type, "
            "or restore the previous type"
        )
        super().__init__(message, help_text)
        self.secret_name = secret_name
        self.current_type = current_type
        self.requested_type = requested_type


class NotFoundError(SecretSyncError):
    """Raised by a SecretStore when the requested Secret does not exist

    The reconciler treats this as the signal to create the Secret; it is
    never surfaced to reconcile callers.
    """

    def __init__(self, name: str, namespace: str):
        super().__init__(f"Secret '{name}' not found in namespace '{namespace}'")
        self.name = name
        self.namespace = namespace


class StoreError(SecretSyncError):
    """Raised when the backing store fails a get, create or update call

    The original exception is available as ``__cause__``.
    """

    def __init__(self, operation: str, name: str, namespace: str, reason: str):
        message = (
            f"Kubernetes secret {operation} failed for '{name}' "
            f"in namespace '{namespace}': {reason}"
        )
        super().__init__(message, "The reconcile can be retried once the store is reachable")
        self.operation = operation
        self.name = name
        self.namespace = namespace
        self.reason = reason
