# shopapi/repos/category_repo.py
from sqlalchemy import select, or_
from sqlalchemy.orm import Session
from shopapi.data.models.category import CategoryModel


class CategoryRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_categories(self) -> list[CategoryModel]:
        return list(
            self.db.execute(select(CategoryModel).order_by(CategoryModel.name)).scalars().all()
        )

    def get_category(self, category_id: int) -> CategoryModel | None:
        return self.db.get(CategoryModel, category_id)

    def exists_name_or_slug(self, name: str, slug: str) -> bool:
        found = self.db.execute(
            select(CategoryModel.id).where(
                or_(CategoryModel.name == name, CategoryModel.slug == slug)
            )
        ).first()
        return found is not None

    def create_category(self, category: CategoryModel) -> CategoryModel:
        self.db.add(category)
        self.db.commit()
        self.db.refresh(category)
        return category

    def rollback(self):
        self.db.rollback()
