from dataclasses import dataclass


@dataclass(frozen=True)
class LeaveQuota:
    active_count: int
    max_pending: int

    @property
    def can_request_more(self) -> bool:
        return self.active_count < self.max_pending
