from typing import Optional
from pydantic import BaseModel

class LoginRequest(BaseModel):
    loginId: Optional[str] = None
    password: Optional[str] = None

class TokenResponse(BaseModel):
    token: str
