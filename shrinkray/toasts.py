import uuid
from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class Toast:
    id: str
    text: str
    expires_at: float


@dataclass
class ToastQueue:
    lifetime: float = 2.6
    toasts: List[Toast] = field(default_factory=list)

    def push(self, text: str, now: float) -> str:
        toast = Toast(id=uuid.uuid4().hex, text=text, expires_at=now + self.lifetime)
        self.toasts.append(toast)
        return toast.id

    def remove(self, toast_id: str) -> None:
        self.toasts = [t for t in self.toasts if t.id != toast_id]

    def expire(self, now: float) -> List[Toast]:
        expired = [t for t in self.toasts if t.expires_at <= now]
        self.toasts = [t for t in self.toasts if t.expires_at > now]
        return expired

    def active(self, now: float) -> List[Toast]:
        return [t for t in self.toasts if t.expires_at > now]
