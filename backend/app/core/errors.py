# 서비스 계층 예외 — 라우터에서 HTTPException으로 변환


class SearchUnavailable(Exception):
    # 검색 중 저장소 장애(연결/타임아웃). 부분 결과 없이 전체 실패
    pass


class RecipeNotFound(Exception):
    def __init__(self, recipe_id: str):
        super().__init__(f"Recipe not found with id: {recipe_id}")
        self.recipe_id = recipe_id


class UserNotFound(Exception):
    def __init__(self, user_id: str):
        super().__init__(f"User not found with id: {user_id}")
        self.user_id = user_id


class ForbiddenAction(Exception):
    # 작성자 아닌 사용자의 수정/삭제
    pass
