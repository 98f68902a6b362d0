class ShieldedPoolError(Exception):
    pass


class DomainError(ShieldedPoolError, ValueError):
    """
    A numeric input that does not fit the domain it is meant to be encoded in,
    e.g. a note public key outside the scalar field or a negative amount.
    """

    def __init__(self, what: str, value):
        super().__init__(what, value)
        self.what = what
        self.value = value

    def __str__(self):
        return f"{self.what} out of domain: {self.value!r}"


class Unauthorized(ShieldedPoolError):
    def __init__(self, caller):
        super().__init__(caller)
        self.caller = caller

    def __str__(self):
        return f"Caller {self.caller!r} is not the administrator"


class InvalidRate(ShieldedPoolError):
    def __init__(self, rate: int):
        super().__init__(rate)
        self.rate = rate

    def __str__(self):
        return f"Fee rate {self.rate} must be below 10000 basis points"


class AlreadyInitialized(ShieldedPoolError):
    def __str__(self):
        return "Already initialized"


class NotInitialized(ShieldedPoolError):
    def __str__(self):
        return "Not initialized"
