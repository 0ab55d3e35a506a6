class ReceiptScanError(Exception):
    """Base for every failure that terminates a scan run.

    ``user_message`` is safe to show to the person holding the receipt;
    ``str(exc)`` may carry internal detail and is only for logs.
    """

    user_message = "Receipt processing failed. Please try again."

    def __init__(self, detail: str = "", user_message: str | None = None):
        super().__init__(detail or self.user_message)
        if user_message is not None:
            self.user_message = user_message


class InputError(ReceiptScanError):
    user_message = "Please choose a receipt image (JPEG, PNG or similar)."


class ServiceError(ReceiptScanError):
    user_message = "Could not reach the receipt reader. Please try again."


class ParseError(ReceiptScanError):
    user_message = "Failed to read the receipt. Please try again with a clearer photo."


class SchemaError(ReceiptScanError):
    user_message = ParseError.user_message
