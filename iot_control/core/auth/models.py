"""
Models cho người dùng đã xác thực.
"""
from typing import Any, Dict, Optional
from pydantic import BaseModel

class AuthUser(BaseModel):
    """Người dùng trả về bởi nhà cung cấp định danh."""
    uid: str
    email: Optional[str] = None
    id_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expires_in: int = 3600

    @classmethod
    def from_provider(cls, payload: Dict[str, Any]) -> "AuthUser":
        """Tạo từ phản hồi accounts:signInWithPassword / accounts:signUp."""
        return cls(
            uid=payload["localId"],
            email=payload.get("email"),
            id_token=payload.get("idToken"),
            refresh_token=payload.get("refreshToken"),
            expires_in=int(payload.get("expiresIn", 3600))
        )

    @classmethod
    def from_claims(cls, claims: Dict[str, Any], id_token: Optional[str] = None) -> "AuthUser":
        """Tạo từ các claim của ID token đã xác thực."""
        return cls(
            uid=claims.get("uid") or claims["sub"],
            email=claims.get("email"),
            id_token=id_token
        )

    def public(self) -> Dict[str, Any]:
        """Thông tin hiển thị được, không kèm token."""
        return {"uid": self.uid, "email": self.email}
