# 공용 의존성/헬퍼 (인증 게이트웨이가 넘겨준 사용자 id 등)
from typing import Optional

from fastapi import Header, HTTPException

USER_HEADER = "X-User-Id"

def get_current_user_id(x_user_id: Optional[str] = Header(default=None, alias=USER_HEADER)) -> str:
    # 상위 인증 계층이 검증 후 세팅한 헤더만 신뢰. 없으면 401
    v = (x_user_id or "").strip()
    if not v:
        raise HTTPException(status_code=401, detail="authentication required")
    return v
