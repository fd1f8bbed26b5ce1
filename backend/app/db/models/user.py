# app/db/models/user.py
# 사용자 문서. 가입/로그인은 인증 서비스 담당이고 여기선 저장 형태만 정의
from typing import List
from datetime import datetime
from pydantic import BaseModel, Field

class UserDoc(BaseModel):
    username: str
    email: str
    passwordHash: str = ""              # 인증 서비스가 채움 (불투명 값)
    roles: List[str] = ["ROLE_USER"]
    createdAt: datetime = Field(default_factory=datetime.utcnow)
