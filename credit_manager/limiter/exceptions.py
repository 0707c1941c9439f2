class CreditManagerError(Exception):
    pass


class NotRegisteredError(CreditManagerError):
    def __init__(self, resource_id: str) -> None:
        super().__init__(f"Resource {resource_id} is not registered in credit manager")
        self.resource_id = resource_id


class QuotaExceededError(CreditManagerError):
    def __init__(self, credits: int, quota: int) -> None:
        super().__init__(f"Requested {credits} credits exceeds per-minute quota {quota}")
        self.credits = credits
        self.quota = quota


class InsufficientCreditsError(CreditManagerError):
    def __init__(self, credits: int, balance: int) -> None:
        super().__init__(f"Can't accumulate enough credits: need {credits}, have {balance}")
        self.credits = credits
        self.balance = balance


class WindowExceededError(CreditManagerError):
    def __init__(self, seconds: int, window_sec: int) -> None:
        super().__init__(f"Required wait {seconds}s exceeds replenishment window {window_sec}s")
        self.seconds = seconds
        self.window_sec = window_sec
