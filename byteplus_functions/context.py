from typing import Optional

from pydantic import BaseModel


class CallerContext(BaseModel):
    """Identity attached to a callable invocation. ``uid`` is None when unauthenticated."""
    uid: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.uid)
