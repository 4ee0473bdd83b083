from datetime import datetime, timezone

from sqlalchemy import Column, Integer, ForeignKey, String, DateTime, UniqueConstraint, CheckConstraint

from shopapi.data.database import Base


class CartItemModel(Base):
    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True)
    session_id = Column(String(255), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False)

    quantity = Column(Integer, nullable=False, default=1)
    added_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    #jedna linia na pare (sesja, produkt)
    __table_args__ = (
        UniqueConstraint("session_id", "product_id", name="u_cart_session_product"),
        CheckConstraint("quantity >= 1", name="ck_cart_items_quantity_positive"),
    )
