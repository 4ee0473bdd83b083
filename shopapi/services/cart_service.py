from decimal import Decimal, ROUND_HALF_UP
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shopapi.data.models.cart_item import CartItemModel
from shopapi.domain.errors import NotFound, ValidationError
from shopapi.domain.schemas import CartAddedLineOut, CartLineOut, CartOut
from shopapi.domain.session import SessionIdentity
from shopapi.repos.cart_repo import CartRepo
from shopapi.repos.product_repo import ProductRepo
from shopapi.utils.logging import get_logger

logger = get_logger(__name__)

CENT = Decimal("0.01")


def round_money(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


class CartService:
    """
    Koszyk per sesja.
    commands (add, remove) modyfikuja stan
    query (list) tylko odczyt
    Stan magazynu sprawdzany dopiero przy checkoucie.
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.products = ProductRepo(db)

    #query - odczyt
    def list_cart(self, session: SessionIdentity) -> CartOut:
        lines = self.repo.get_cart_lines(session.value)

        items = [
            CartLineOut(
                id=line.id,
                product_id=line.product_id,
                name=line.name,
                price=line.price,
                image_url=line.image_url,
                quantity=line.quantity,
                subtotal=line.price * line.quantity,
                added_at=line.added_at,
            )
            for line in lines
        ]
        total = sum((i.subtotal for i in items), Decimal("0.00"))

        return CartOut(items=items, total=round_money(total), count=len(items))

    #commands
    def add_to_cart(self, session: SessionIdentity, product_id: int, quantity: int = 1) -> List[CartAddedLineOut]:
        if quantity < 1:
            raise ValidationError("quantity must be at least 1")

        product = self.products.get_product(product_id)
        if not product:
            raise NotFound("Product not found")

        try:
            self._merge_line(session, product_id, quantity)
            self.repo.commit()
        except IntegrityError:
            # dwa rownolegle pierwsze dodania tego samego produktu - drugi scala ilosc
            self.repo.rollback()
            self._merge_line(session, product_id, quantity)
            self.repo.commit()

        return [
            CartAddedLineOut(id=line.id, quantity=line.quantity, name=line.name, price=line.price)
            for line in self.repo.get_cart_lines(session.value)
        ]

    def _merge_line(self, session: SessionIdentity, product_id: int, quantity: int):
        #sprawdz czy produkt juz jest w koszyku tej sesji
        existing_item = self.repo.get_cart_item(session.value, product_id)

        if existing_item:
            logger.info(
                f"Produkt {product_id} juz jest w koszyku {session}, zwiekszam ilosc "
                f"z {existing_item.quantity} do {existing_item.quantity + quantity}"
            )
            existing_item.quantity += quantity
            self.repo.add_cart_item(existing_item)
        else:
            logger.info(f"Dodaje nowy produkt {product_id} do koszyka {session}")
            self.repo.add_cart_item(
                CartItemModel(
                    session_id=session.value,
                    product_id=product_id,
                    quantity=quantity,
                )
            )

    def remove_cart_line(self, session: SessionIdentity, line_id: int) -> None:
        item = self.repo.get_line_for_session(line_id, session.value)

        # linia innej sesji = nie istnieje
        if not item:
            raise NotFound("Cart item not found")

        logger.info(f"Usuwanie linii {line_id} z koszyka {session}")
        self.repo.delete_cart_item(item)
        self.repo.commit()
