"""Exception hierarchy for promptslip.

User-facing validation failures subclass ``ValueError`` so web handlers can
map them to a 400 response. ``FieldTooLong`` subclasses ``AssertionError``
because it only fires on a programming error in payload composition.
"""

from typing import Optional


class PromptSlipError(Exception):
    """Base class for all promptslip errors."""


class InvalidTargetFormat(PromptSlipError, ValueError):
    """PromptPay target is neither a local mobile number nor a tax/national ID."""

    def __init__(self, target: str, digits: Optional[str] = None):
        self.target = target
        self.digits = digits
        super().__init__(
            f"Invalid PromptPay target {target!r}: expected a 10-digit mobile "
            f"number starting with 0 or a tax/national ID of 13+ digits"
        )


class InvalidAmount(PromptSlipError, ValueError):
    """Payment amount is not a non-negative number."""

    def __init__(self, amount: object, reason: str = "not a number"):
        self.amount = amount
        super().__init__(f"Invalid amount {amount!r}: {reason}")


class FieldTooLong(PromptSlipError, AssertionError):
    """TLV value does not fit a two-digit length field."""

    def __init__(self, tag: str, length: int):
        self.tag = tag
        self.length = length
        super().__init__(f"TLV field {tag!r} value is {length} bytes, max is 99")


class MissingRequiredModelField(PromptSlipError, ValueError):
    """A receipt field required to produce a valid document is absent."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Receipt is missing required field: {field}")


class UnknownPaperProfile(PromptSlipError, KeyError):
    """No paper profile registered under the requested name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"Unknown paper profile: {self.name!r}"
