# shopapi/domain/session.py
from pydantic import BaseModel, ConfigDict, Field

from shopapi.utils.settings import DEFAULT_SESSION_ID


class SessionIdentity(BaseModel):
    """
    Tozsamosc koszyka. Na razie niezweryfikowany string od klienta
    (naglowek x-session-id), z domyslna wspolna wartoscia.
    """

    value: str = Field(..., min_length=1, max_length=255)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_header(cls, raw: str | None) -> "SessionIdentity":
        raw = (raw or "").strip()
        return cls(value=raw or DEFAULT_SESSION_ID)

    def __str__(self) -> str:
        return self.value
