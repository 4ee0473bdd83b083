from sqlalchemy import select, or_
from sqlalchemy.orm import Session
from shopapi.data.models.user import UserModel

class UserRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: int) -> UserModel | None:
        return self.db.get(UserModel, user_id)

    def get_by_email(self, email: str) -> UserModel | None:
        return self.db.execute(
            select(UserModel).where(UserModel.email == email)
        ).scalar_one_or_none()

    def exists_username_or_email(self, username: str, email: str) -> bool:
        found = self.db.execute(
            select(UserModel.id).where(
                or_(UserModel.username == username, UserModel.email == email)
            )
        ).first()
        return found is not None

    def create_user(self, user: UserModel) -> UserModel:
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def rollback(self):
        self.db.rollback()
