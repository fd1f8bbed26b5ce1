# 레시피 저장 문서 스키마
from pydantic import BaseModel, Field
from typing import Dict, List, Optional
from bson import ObjectId

class RecipeDoc(BaseModel):
    # recipes 컬렉션 1건. createdAt/updatedAt은 저장소(RecipeStore)가 찍는다
    model_config = {"arbitrary_types_allowed": True}

    title: str
    image: Optional[str] = None
    cuisine: Optional[str] = None
    prepTime: int = Field(default=0, ge=0)
    ingredientNames: List[str] = Field(default_factory=list)
    ingredients: Dict[str, int] = Field(default_factory=dict)   # {"rice": 200, ...}
    steps: str = ""
    dietaryPreferences: List[str] = Field(default_factory=list)
    authorId: ObjectId                                          # users._id (비소유 참조)
    favoritesCount: int = Field(default=0, ge=0)
